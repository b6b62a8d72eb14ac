"""Tree builder: bracket resolution, shape normalization and precedence folding.

There is no grammar; a flat token list is grouped in three stages that each
reuse the same ``Leaf``/``Group`` node type:

``resolve``   -> ``ResolvedTree``   parentheses and bracket literals become groups
``normalize`` -> ``NormalizedTree`` ans-fill, implicit calls, unary wrapping
``fold``      -> ``ExpressionTree`` tier-by-tier binary/assignment folding
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from .errors import UnbalancedBracket, UnbalancedParenthesis
from .lexer import OPERAND_KINDS, Token, tokenize
from .tree import ExpressionTree, Group, Leaf, Node, NormalizedTree, ResolvedTree, is_leaf_kind, is_op

# Highest precedence first. Both assignment operators share the last tier.
PRECEDENCE_TIERS: Final[tuple[frozenset[str], ...]] = (
    frozenset({"^"}),
    frozenset({"*", "/", "//"}),
    frozenset({"+", "-"}),
    frozenset({"=>", "="}),
)
BINARY_OPS: Final[frozenset[str]] = frozenset().union(*PRECEDENCE_TIERS)
ASSIGNMENT_OPS: Final[frozenset[str]] = PRECEDENCE_TIERS[-1]
UNARY_OPS: Final[frozenset[str]] = frozenset({"-", "&", "!"})
ANS_NAME: Final[str] = "ans"

_CLOSERS: Final[dict[str, str]] = {"LPAREN": "RPAREN", "LBRACK": "RBRACK"}
_PREFIX_POSITION_KINDS: Final[tuple[str, ...]] = ("OP", "COMMA", "SEMI", "LBRACK")


def is_operand(node: Node) -> bool:
    return isinstance(node, Group) or is_leaf_kind(node, *OPERAND_KINDS)


# --- Brace/bracket resolver -------------------------------------------------


def _unbalanced(token: Token, message: str):
    if token.kind in ("LPAREN", "RPAREN"):
        return UnbalancedParenthesis(message, token.pos, token.end)
    return UnbalancedBracket(message, token.pos, token.end)


def _resolve_span(tokens: Sequence[Token], index: int, opener: Token | None) -> tuple[list[Node], int]:
    nodes: list[Node] = []
    while index < len(tokens):
        token = tokens[index]
        if token.kind in _CLOSERS:
            inner, index = _resolve_span(tokens, index + 1, token)
            if token.kind == "LBRACK":
                nodes.append(Group((Leaf(token), *inner)))
            else:
                nodes.append(Group(tuple(inner)))
            continue
        if token.kind in ("RPAREN", "RBRACK"):
            if opener is None or _CLOSERS[opener.kind] != token.kind:
                raise _unbalanced(token, f"unexpected closing {token.text!r}")
            return nodes, index + 1
        nodes.append(Leaf(token))
        index += 1

    if opener is not None:
        raise _unbalanced(opener, f"{opener.text!r} is never closed")
    return nodes, index


def resolve(tokens: Iterable[Token]) -> ResolvedTree:
    """Group every ``( ... )`` span and every ``[ ... ]`` literal.

    A bracket group keeps its ``[`` leaf as first child; its contents are left
    uninterpreted for the evaluator.
    """
    nodes, _ = _resolve_span(list(tokens), 0, None)
    return ResolvedTree(nodes=tuple(nodes))


# --- Shape normalizer -------------------------------------------------------


def _map_groups(nodes: Iterable[Node], transform) -> list[Node]:
    out: list[Node] = []
    for node in nodes:
        if isinstance(node, Group):
            node = Group(tuple(transform(list(node.children))))
        out.append(node)
    return out


def _fill_ans(nodes: list[Node]) -> list[Node]:
    if not nodes:
        return nodes
    first = nodes[0]
    if is_op(first, *BINARY_OPS) and not is_op(first, *UNARY_OPS):
        pos = first.token.pos
        ans = Leaf(Token(kind="NAME", text=ANS_NAME, pos=pos, end=pos))
        return [ans, *nodes]
    return nodes


def _pair_calls(nodes: list[Node]) -> list[Node]:
    nodes = _map_groups(nodes, _pair_calls)
    i = 0
    while i + 1 < len(nodes):
        if is_operand(nodes[i]) and is_operand(nodes[i + 1]):
            nodes[i : i + 2] = [Group((nodes[i], nodes[i + 1]))]
        else:
            i += 1
    return nodes


def _wrap_unary(nodes: list[Node]) -> list[Node]:
    nodes = _map_groups(nodes, _wrap_unary)
    # Right to left so runs like "- - x" nest.
    for i in range(len(nodes) - 2, -1, -1):
        if not is_op(nodes[i], *UNARY_OPS):
            continue
        if i == 0 or is_leaf_kind(nodes[i - 1], *_PREFIX_POSITION_KINDS):
            nodes[i : i + 2] = [Group((nodes[i], nodes[i + 1]))]
    return nodes


def normalize(resolved: ResolvedTree) -> NormalizedTree:
    nodes = _fill_ans(list(resolved.nodes))
    nodes = _pair_calls(nodes)
    nodes = _wrap_unary(nodes)
    return NormalizedTree(nodes=tuple(nodes))


# --- Precedence folder ------------------------------------------------------


def _fold_nodes(nodes: list[Node]) -> list[Node]:
    nodes = _map_groups(nodes, _fold_nodes)
    for tier in PRECEDENCE_TIERS:
        i = 1
        while i + 1 < len(nodes):
            left, op, right = nodes[i - 1], nodes[i], nodes[i + 1]
            if is_op(op, *tier) and is_operand(left) and is_operand(right):
                nodes[i - 1 : i + 2] = [Group((left, op, right))]
            else:
                i += 1
    return nodes


def fold(normalized: NormalizedTree) -> ExpressionTree:
    return ExpressionTree(root=Group(tuple(_fold_nodes(list(normalized.nodes)))))


def build_expression_tree(tokens: Iterable[Token]) -> ExpressionTree:
    return fold(normalize(resolve(tokens)))


def parse(source: str) -> ExpressionTree:
    """Tokenize and build the expression tree for one input line."""
    return build_expression_tree(tokenize(source))
