"""Tree nodes shared by every tree-building stage, plus per-stage wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .lexer import Token


@dataclass(frozen=True)
class Leaf:
    token: Token

    @property
    def kind(self) -> str:
        return self.token.kind

    @property
    def text(self) -> str:
        return self.token.text

    def flat_string(self) -> str:
        return self.token.text


@dataclass(frozen=True)
class Group:
    children: tuple["Node", ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    @property
    def is_bracket_literal(self) -> bool:
        return bool(self.children) and is_leaf_kind(self.children[0], "LBRACK")

    def flat_string(self) -> str:
        if self.is_bracket_literal:
            inner = " ".join(child.flat_string() for child in self.children[1:])
            return f"[{inner}]"
        return "(" + " ".join(child.flat_string() for child in self.children) + ")"


Node = Union[Leaf, Group]


def is_leaf_kind(node: Node, *kinds: str) -> bool:
    return isinstance(node, Leaf) and node.kind in kinds


def is_op(node: Node, *ops: str) -> bool:
    """True for an operator leaf, optionally restricted to the given texts."""
    if not is_leaf_kind(node, "OP"):
        return False
    return not ops or node.text in ops


def is_name(node: Node) -> bool:
    return is_leaf_kind(node, "NAME")


@dataclass(frozen=True)
class ResolvedTree:
    """Parentheses and brackets resolved into groups."""

    nodes: tuple[Node, ...]


@dataclass(frozen=True)
class NormalizedTree:
    """Ans-filled, implicit calls paired and unary operators wrapped."""

    nodes: tuple[Node, ...]


@dataclass(frozen=True)
class ExpressionTree:
    """Fully folded tree ready for evaluation."""

    root: Group

    def flat_string(self) -> str:
        return self.root.flat_string()
