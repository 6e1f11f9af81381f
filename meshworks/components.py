"""Actor components: lifecycle flags, registration and scene attachment."""

from __future__ import annotations

import copy
import enum
from typing import Any, List, Optional

from meshworks.geometry import RayHits, Vector


class EndPlayReason(enum.Enum):
    """Why gameplay ended for an actor or component."""

    DESTROYED = 0
    WORLD_TRANSITION = 1
    QUIT = 2


class ComponentStateError(RuntimeError):
    """Raised when a lifecycle step is taken in the wrong state."""


class ActorComponent:
    """A piece of behaviour owned by an actor."""

    def __init__(self) -> None:
        self.owner: Optional[Any] = None
        self.can_ever_tick = False
        self.registered = False
        self.wants_initialize_component = False
        self.auto_active = False
        self.tick_enabled = True
        self.has_been_initialized = False
        self.has_begun_play = False
        self.is_being_destroyed = False
        self.is_active = False

    def initialize_component(self) -> None:
        """Mark the component initialized; it must not be already."""
        if self.has_been_initialized:
            raise ComponentStateError("component is already initialized")
        self.has_been_initialized = True

    def uninitialize_component(self) -> None:
        """Undo initialization; the component must be initialized."""
        if not self.has_been_initialized:
            raise ComponentStateError("component is not initialized")
        self.has_been_initialized = False

    def begin_play(self) -> None:
        self.has_begun_play = True

    def tick_component(self, delta_time: float) -> None:
        """Advance the component by delta_time seconds; does nothing here."""

    def on_component_destroyed(self) -> None:
        """Hook called at the end of destroy_component."""

    def end_play(self, reason: EndPlayReason) -> None:
        """End gameplay; begin_play must have been called."""
        if not self.has_begun_play:
            raise ComponentStateError("component has not begun play")
        self.has_begun_play = False

    def destroy_component(self) -> None:
        """Detach from the owner and tear the component down once."""
        if self.is_being_destroyed:
            return
        self.is_being_destroyed = True

        owner = self.owner
        if owner is not None:
            owner.remove_owned_component(self)
            if getattr(owner, "root_component", None) is self:
                owner.set_root_component(None)

        if self.has_begun_play:
            self.end_play(EndPlayReason.DESTROYED)
        if self.has_been_initialized:
            self.uninitialize_component()
        self.on_component_destroyed()

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def on_register(self) -> None:
        """Hook run by register_component."""
        if self.auto_active:
            self.activate()
        if self.wants_initialize_component and not self.has_been_initialized:
            self.initialize_component()

    def on_unregister(self) -> None:
        """Hook run by unregister_component."""
        self.deactivate()

    def register_component(self) -> None:
        if self.registered:
            return
        self.registered = True
        self.on_register()

    def unregister_component(self) -> None:
        if not self.registered:
            return
        self.on_unregister()
        self.registered = False

    def _after_copy(self) -> None:
        """Reset what a copy must not share with its source."""
        self.owner = None

    def duplicate(self) -> ActorComponent:
        """Return a copy of this component with no owner."""
        clone = copy.copy(self)
        clone._after_copy()
        return clone


class SceneComponent(ActorComponent):
    """A component with a transform that can be attached to another."""

    def __init__(self) -> None:
        super().__init__()
        self.relative_location = Vector(0.0, 0.0, 0.0)
        self.relative_rotation = Vector(0.0, 0.0, 0.0)
        self.relative_scale = Vector(1.0, 1.0, 1.0)
        self.attach_parent: Optional[SceneComponent] = None
        self.attach_children: List[SceneComponent] = []

    def add_location(self, delta: Vector) -> None:
        self.relative_location = self.relative_location + delta

    def add_rotation(self, delta: Vector) -> None:
        self.relative_rotation = self.relative_rotation + delta

    def add_scale(self, delta: Vector) -> None:
        self.relative_scale = self.relative_scale + delta

    def world_location(self) -> Vector:
        """Sum of the relative locations up the attachment chain."""
        if self.attach_parent is not None:
            return self.attach_parent.world_location() + self.relative_location
        return self.relative_location

    def world_rotation(self) -> Vector:
        """The parent's own rotation plus this one; only one level is added."""
        if self.attach_parent is not None:
            return self.attach_parent.relative_rotation + self.relative_rotation
        return self.relative_rotation

    def world_scale(self) -> Vector:
        """Sum of the relative scales up the attachment chain."""
        if self.attach_parent is not None:
            return self.attach_parent.world_scale() + self.relative_scale
        return self.relative_scale

    def setup_attachment(self, parent: Optional[SceneComponent]) -> bool:
        """Attach to parent; return whether the attachment was made."""
        if (
            parent is None
            or parent is self
            or parent is self.attach_parent
            or (
                self.attach_parent is not None
                and any(child is self for child in self.attach_parent.attach_children)
            )
        ):
            return False
        self.attach_parent = parent
        if not any(child is self for child in parent.attach_children):
            parent.attach_children.append(self)
        return True

    def check_ray_intersection(self, origin: Vector, direction: Vector) -> RayHits:
        """A bare scene component has no geometry and is never hit."""
        return RayHits(0, None)

    def _after_copy(self) -> None:
        super()._after_copy()
        self.attach_parent = None
        self.attach_children = []