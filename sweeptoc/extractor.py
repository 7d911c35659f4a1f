"""
Call-site extraction.

Finds ``name = <Constructor>(...)`` assignments for the recognized sweep
constructors and turns their arguments into a string-keyed parameter map.

Positional arguments are mapped onto named fields per constructor:

    Sweep1D(set_param, start, stop, step, ...)
    Sweep2D([in_param, in_start, in_stop, in_step], [out_param, out_start, out_stop, out_step], ...)
    SimulSweep({param: {"start": ..., "stop": ..., "step": ...}, ...}, ...)

Keyword arguments always win over positional ones for the same field.
``<name>.follow_param(...)`` statements following a call site are attached to
the most recent call site assigned to ``<name>``.
"""
from __future__ import annotations

from typing import Callable

from tree_sitter import Node

from sweeptoc.logging_utils import get_logger
from sweeptoc.models import SWEEP_CONSTRUCTORS, ConstantTable, RawCallRecord, SimulParam, SweepKind
from sweeptoc.resolver import resolve_value
from sweeptoc.syntax import NodeVisitor, node_text, value_children

logger = get_logger(__name__)

SWEEP1D_POSITIONS = ("set_param", "start", "stop", "step")
QUADRUPLE_FIELDS = ("param", "start", "stop", "step")
SIMUL_KEYS = ("start", "stop", "step")
FOLLOW_PARAM_METHOD = "follow_param"

# (resolved text, original node)
Positional = tuple[str, Node]
PositionalMapper = Callable[[RawCallRecord, list[Positional], bytes, ConstantTable], None]


def _fill(params: dict[str, str], key: str, value: str) -> None:
    """Positional values only fill fields no keyword argument has set."""
    if value and not params.get(key):
        params[key] = value


def _collect_arguments(
    args_node: Node, source_bytes: bytes, constants: ConstantTable
) -> tuple[dict[str, str], list[Positional]]:
    params: dict[str, str] = {}
    positional: list[Positional] = []

    # Sweep(x for x in ...) has a generator_expression in place of an argument_list.
    if args_node.type != "argument_list":
        return params, positional

    positional_open = True
    for child in value_children(args_node):
        if child.type == "keyword_argument":
            name_node = child.child_by_field_name("name")
            value_node = child.child_by_field_name("value")
            if name_node is not None and value_node is not None:
                key = node_text(source_bytes, name_node)
                params[key] = resolve_value(value_node, source_bytes, constants)
        elif child.type == "list_splat":
            # Positions after *args are unknown.
            positional_open = False
        elif child.type == "dictionary_splat":
            continue
        elif positional_open:
            positional.append((resolve_value(child, source_bytes, constants), child))

    return params, positional


def _list_values(node: Node, source_bytes: bytes, constants: ConstantTable) -> list[str]:
    return [resolve_value(c, source_bytes, constants) for c in value_children(node)]


def _map_nothing(record, positional, source_bytes, constants) -> None:
    return None


def _map_sweep1d(record, positional, source_bytes, constants) -> None:
    for key, (value, _node) in zip(SWEEP1D_POSITIONS, positional):
        _fill(record.params, key, value)


def _map_sweep2d(record, positional, source_bytes, constants) -> None:
    for side, (value, node) in zip(("inner", "outer"), positional):
        if node.type in {"list", "tuple"}:
            items = _list_values(node, source_bytes, constants)
            for name, item in zip(QUADRUPLE_FIELDS, items):
                _fill(record.params, f"{side}_{name}", item)
        # A bare reference (e.g. a variable holding the list) keeps only the combined text.
        _fill(record.params, f"{side}_sweep", value)


def skip_malformed_simul_entry(start: str, stop: str, step: str) -> bool:
    """
    Entries with none of start/stop/step produce no tuple and no diagnostic.

    Other entries of the same dictionary are unaffected.
    """
    return not (start or stop or step)


def extract_simul_params(
    node: Node, source_bytes: bytes, constants: ConstantTable
) -> tuple[SimulParam, ...]:
    """
    Destructure ``{param: {"start": a, "stop": b, "step": c}, ...}`` in source order.
    """
    out: list[SimulParam] = []
    for pair in value_children(node):
        if pair.type != "pair":
            continue
        key_node = pair.child_by_field_name("key")
        value_node = pair.child_by_field_name("value")
        if key_node is None or value_node is None or value_node.type != "dictionary":
            continue

        param = resolve_value(key_node, source_bytes, constants)
        found = {k: "" for k in SIMUL_KEYS}
        for inner in value_children(value_node):
            if inner.type != "pair":
                continue
            inner_key = inner.child_by_field_name("key")
            inner_value = inner.child_by_field_name("value")
            if inner_key is None or inner_value is None:
                continue
            key_name = node_text(source_bytes, inner_key).strip("'\"")
            if key_name in found:
                found[key_name] = resolve_value(inner_value, source_bytes, constants)

        if skip_malformed_simul_entry(found["start"], found["stop"], found["step"]):
            continue
        out.append(SimulParam(param=param, **found))
    return tuple(out)


def _map_simulsweep(record, positional, source_bytes, constants) -> None:
    if not positional:
        return
    value, node = positional[0]
    if node.type == "dictionary":
        record.simul_params = extract_simul_params(node, source_bytes, constants)
    else:
        # Likely a variable holding the dict; contents can't be inspected.
        _fill(record.params, "parameter_dict", value)


def _map_first_as_set_param(record, positional, source_bytes, constants) -> None:
    if positional:
        _fill(record.params, "set_param", positional[0][0])


POSITIONAL_MAPPERS: dict[SweepKind, PositionalMapper] = {
    SweepKind.SWEEP0D: _map_nothing,
    SweepKind.SWEEP1D: _map_sweep1d,
    SweepKind.SWEEP2D: _map_sweep2d,
    SweepKind.SIMULSWEEP: _map_simulsweep,
    SweepKind.SWEEPQUEUE: _map_first_as_set_param,
}


def _call_site(
    assign_node: Node, source_bytes: bytes, constants: ConstantTable
) -> RawCallRecord | None:
    left = assign_node.child_by_field_name("left")
    right = assign_node.child_by_field_name("right")
    if left is None or right is None or left.type != "identifier" or right.type != "call":
        return None

    fn = right.child_by_field_name("function")
    args_node = right.child_by_field_name("arguments")
    if fn is None or args_node is None:
        return None
    kind = SWEEP_CONSTRUCTORS.get(node_text(source_bytes, fn))
    if kind is None:
        return None

    params, positional = _collect_arguments(args_node, source_bytes, constants)
    record = RawCallRecord(kind=kind, name=node_text(source_bytes, left), params=params)
    if positional:
        logger.debug(f"Mapping {len(positional)} positional args for {kind.value} '{record.name}'")
    POSITIONAL_MAPPERS[kind](record, positional, source_bytes, constants)
    return record


def _follow_param_target(call_node: Node, source_bytes: bytes) -> str | None:
    """Return ``s`` for a statement ``s.follow_param(...)``, else None."""
    parent = call_node.parent
    if parent is None or parent.type != "expression_statement":
        return None
    fn = call_node.child_by_field_name("function")
    if fn is None or fn.type != "attribute":
        return None
    obj = fn.child_by_field_name("object")
    attr = fn.child_by_field_name("attribute")
    if obj is None or attr is None or obj.type != "identifier":
        return None
    if node_text(source_bytes, attr) != FOLLOW_PARAM_METHOD:
        return None
    return node_text(source_bytes, obj)


def extract_call_sites(
    root: Node, source_bytes: bytes, constants: ConstantTable
) -> list[RawCallRecord]:
    """Return one record per recognized call site, in source order."""
    records: list[RawCallRecord] = []
    latest: dict[str, RawCallRecord] = {}

    def on_assignment(node: Node) -> None:
        record = _call_site(node, source_bytes, constants)
        if record is not None:
            records.append(record)
            latest[record.name] = record

    def on_call(node: Node) -> None:
        target = _follow_param_target(node, source_bytes)
        if target is None or target not in latest:
            return
        args_node = node.child_by_field_name("arguments")
        if args_node is None:
            return
        _params, positional = _collect_arguments(args_node, source_bytes, constants)
        latest[target].follow_params.extend(value for value, _node in positional)

    NodeVisitor({"assignment": on_assignment, "call": on_call}).visit(root)
    return records
