"""
Attack component module for the skirmish engine.

Equipment contributing damage is a composite tree: a single weapon is a leaf,
a bundled loadout (e.g. dual-wielding) is a group. Callers treat both through
the AttackComponent interface.
"""

from abc import abstractmethod
from typing import Any

from combat.modifiers import DamageModifier
from core.error_handling import InvariantViolationError, UnsupportedOperationError
from core.logging import log_debug


class AttackComponent(DamageModifier):
    """A node of the attack equipment tree."""

    @abstractmethod
    def total_damage(self) -> int:
        """Returns the damage contributed by this component and its subtree."""

    @property
    def parent(self) -> "AttackGroup | None":
        """The group currently holding this component, if any."""
        return getattr(self, "_parent_group", None)

    def _set_parent(self, group: "AttackGroup | None") -> None:
        self._parent_group = group

    def add_child(self, component: "AttackComponent") -> None:
        """Adds a child component. Only groups support this."""
        raise UnsupportedOperationError(
            f"Cannot add a child to the leaf component {self!r}."
        )

    def remove_child(self, component: "AttackComponent") -> None:
        """Removes a child component. Only groups support this."""
        raise UnsupportedOperationError(
            f"Cannot remove a child from the leaf component {self!r}."
        )

    def children(self) -> tuple["AttackComponent", ...]:
        """Returns the ordered children; leaves have none."""
        return ()

    def is_ancestor_of(self, component: "AttackComponent") -> bool:
        """Checks whether `component` lies in the subtree below this one."""
        for child in self.children():
            if child is component or child.is_ancestor_of(component):
                return True
        return False


class AttackGroup(AttackComponent):
    """
    Composite attack component aggregating its children.

    Attributes:
        name (str):
            The name of the loadout.

    """

    def __init__(self, name: str, components: list[AttackComponent] | None = None) -> None:
        self.name = name
        self._children: list[AttackComponent] = []
        self._parent_group: AttackGroup | None = None
        for component in components or []:
            self.add_child(component)

    def add_child(self, component: AttackComponent) -> None:
        """
        Appends a child, keeping the tree acyclic.

        Raises:
            InvariantViolationError: If the component is this group, one of
                its ancestors, or already belongs to a group.

        """
        if not isinstance(component, AttackComponent):
            raise TypeError(
                f"Expected an AttackComponent, got {type(component).__name__}."
            )
        if component is self or component.is_ancestor_of(self):
            raise InvariantViolationError(
                f"Adding {component!r} to {self.name} would create a cycle."
            )
        if component.parent is not None:
            raise InvariantViolationError(
                f"{component!r} already belongs to {component.parent.name}."
            )
        self._children.append(component)
        component._set_parent(self)

    def remove_child(self, component: AttackComponent) -> None:
        """Removes a direct child, matched by identity; unknown ones are ignored."""
        for index, child in enumerate(self._children):
            if child is component:
                del self._children[index]
                component._set_parent(None)
                return

    def children(self) -> tuple[AttackComponent, ...]:
        return tuple(self._children)

    def total_damage(self) -> int:
        return sum(child.total_damage() for child in self._children)

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        # Let every child that is itself a modifier adjust the damage, in order.
        modified = damage
        for child in self._children:
            modified = child.apply(attacker, defender, modified)
        log_debug(
            f"{self.name} adjusts damage {damage} -> {modified}",
            {"group": self.name, "children": len(self._children)},
        )
        return modified

    def __repr__(self) -> str:
        return f"AttackGroup({self.name!r}, children={len(self._children)})"
