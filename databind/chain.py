"""
Observer chains: live subscriptions that follow a property path.

For a path [s1..sn] rooted at R, an ObserverChain keeps one ChainNode per
reachable segment. Node k observes property s(k).name on the object that
segment k-1 currently resolves to. When node k is notified, every node
below it is torn down, node k is re-resolved against the new state, and a
fresh tail is built from the new value. The set of live registrations is
therefore always the one a brand-new chain would register against the
current object graph; nothing keeps observing objects that are no longer
reachable through the path.

Indexed segments additionally observe the structure of the list they index
into, so inserts and deletes that move a different element under the
watched index re-wire the tail too. A terminal value that is an observable
list is watched for structural changes as a whole.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from .absent import ABSENT, is_absent
from .accessor import PropertyAccessor, Subscription, default_accessor
from .collection import ListChange
from .exceptions import NotObservableError, UnsupportedIndexError
from .parser import PropertyPath, Segment

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]
ErrorCallback = Callable[[Exception], None]


@dataclass(eq=False)
class ChainNode:
    """
    One link of an observer chain.

    Attributes:
        depth: Position of the segment in the path
        owner: The object the segment is read from
        segment: The segment this node watches
        container: For indexed segments, the sequence read from owner
        value: What the segment currently resolves to
    """
    depth: int
    owner: Any
    segment: Segment
    container: Any = ABSENT
    value: Any = ABSENT
    active: bool = True

    property_subscription: Optional[Subscription] = field(default=None, repr=False)
    container_subscription: Optional[Subscription] = field(default=None, repr=False)
    value_subscription: Optional[Subscription] = field(default=None, repr=False)

    def subscriptions(self) -> List[Subscription]:
        """The active subscriptions held by this node."""
        subs = (self.property_subscription, self.container_subscription, self.value_subscription)
        return [sub for sub in subs if sub is not None and sub.active]

    def release_value(self) -> None:
        """Drop the subscription on the terminal value."""
        if self.value_subscription is not None:
            self.value_subscription.cancel()
            self.value_subscription = None
        self.value = ABSENT

    def release_container(self) -> None:
        """Drop the container subscription and everything resolved from it."""
        self.release_value()
        if self.container_subscription is not None:
            self.container_subscription.cancel()
            self.container_subscription = None
        self.container = ABSENT

    def detach(self) -> None:
        """Drop every subscription; the node is dead afterwards."""
        self.active = False
        self.release_container()
        if self.property_subscription is not None:
            self.property_subscription.cancel()
            self.property_subscription = None


class ObserverChain:
    """
    The self-rewiring set of subscriptions mirroring one path.

    on_change is called after every rebuild the chain performs in response
    to a notification. on_error receives the errors raised while
    rebuilding inside a notification; without it they propagate to the
    code that made the write.

    Construction is strict: if a link reachable at construction time cannot
    report changes, NotObservableError is raised and nothing stays
    registered.
    """

    def __init__(
        self,
        root: Any,
        path: PropertyPath,
        on_change: ChangeCallback,
        on_error: Optional[ErrorCallback] = None,
        accessor: Optional[PropertyAccessor] = None,
    ):
        self.root = root
        self.path = path
        self._on_change = on_change
        self._on_error = on_error
        self._accessor = accessor or default_accessor
        self._nodes: List[ChainNode] = []
        self._disposed = False

        self._strict = True
        try:
            self._build(0, root)
        except Exception:
            self.dispose()
            raise
        finally:
            self._strict = False

    def __repr__(self) -> str:
        return f"ObserverChain({self.path}, nodes={len(self._nodes)}, disposed={self._disposed})"

    # Inspection

    @property
    def nodes(self) -> List[ChainNode]:
        return list(self._nodes)

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def value(self) -> Any:
        """The terminal value, or ABSENT if the chain stops early."""
        if len(self._nodes) < len(self.path):
            return ABSENT
        return self._nodes[-1].value

    def node_at(self, prefix: Union[int, str, PropertyPath]) -> Optional[ChainNode]:
        """
        The node watching the last segment of a path prefix.

        prefix is either a prefix length or the prefix itself.
        """
        if not isinstance(prefix, int):
            prefix = PropertyPath.coerce(prefix)
            if prefix.segments != self.path.segments[:len(prefix)]:
                return None
            prefix = len(prefix)
        if 0 < prefix <= len(self._nodes):
            return self._nodes[prefix - 1]
        return None

    def subscriptions(self) -> List[Subscription]:
        """Every active subscription held by the chain, root first."""
        return [sub for node in self._nodes for sub in node.subscriptions()]

    # Building

    def _build(self, depth: int, owner: Any) -> None:
        while depth < len(self.path) and not is_absent(owner):
            node = ChainNode(depth, owner, self.path[depth])
            self._nodes.append(node)
            self._observe_owner(node)
            self._resolve(node)
            owner = node.value
            depth += 1

    def _observe_owner(self, node: ChainNode) -> None:
        name = node.segment.name
        if not self._accessor.supports_observer(node.owner, name):
            if self._strict:
                raise NotObservableError(node.owner, name)
            logger.warning(
                "Cannot observe '%s' of %s; path %s will not follow changes to it",
                name, type(node.owner).__name__, self.path,
            )
        node.property_subscription = self._accessor.observe(
            node.owner, name, functools.partial(self._on_property_change, node)
        )

    def _resolve(self, node: ChainNode) -> None:
        """Read the segment value from the owner, subscribing to its container."""
        segment = node.segment
        value = self._accessor.get(node.owner, segment.name)
        if not segment.is_indexed:
            node.value = value
            self._observe_value(node)
            return

        node.container = value
        if value is None:
            node.value = ABSENT
            return
        if not self._accessor.is_sequence(value):
            raise UnsupportedIndexError(node.owner, segment.name, value)
        if not self._accessor.supports_collection_observer(value):
            if self._strict:
                raise NotObservableError(node.owner, segment.name)
            logger.warning(
                "Sequence at '%s' of %s does not report changes; path %s will not follow them",
                segment.name, type(node.owner).__name__, self.path,
            )
        node.container_subscription = self._accessor.observe_collection(
            value, functools.partial(self._on_container_change, node)
        )
        self._resolve_element(node)

    def _resolve_element(self, node: ChainNode) -> None:
        node.value = self._accessor.get_item(node.container, node.segment.index)
        self._observe_value(node)

    def _observe_value(self, node: ChainNode) -> None:
        # Only a terminal list is watched as a whole; intermediate lists are
        # covered by the indexed segment that reads from them.
        if node.depth != len(self.path) - 1:
            return
        if self._accessor.supports_collection_observer(node.value):
            node.value_subscription = self._accessor.observe_collection(
                node.value, functools.partial(self._on_value_change, node)
            )

    def _truncate(self, depth: int) -> None:
        for node in self._nodes[depth:]:
            node.detach()
        del self._nodes[depth:]

    # Notifications

    def _on_property_change(self, node: ChainNode, value: Any) -> None:
        if not node.active or self._disposed:
            return
        logger.debug("Rebuilding %s from '%s'", self.path, node.segment)
        self._rebuild(node, reread_owner=True)

    def _on_container_change(self, node: ChainNode, change: ListChange) -> None:
        if not node.active or self._disposed:
            return
        if not change.affects(node.segment.index):
            return
        logger.debug("Rebuilding %s after %s on '%s'", self.path, change.kind.name, node.segment)
        self._rebuild(node, reread_owner=False)

    def _on_value_change(self, node: ChainNode, change: ListChange) -> None:
        if not node.active or self._disposed:
            return
        self._on_change()

    def _rebuild(self, node: ChainNode, reread_owner: bool) -> None:
        self._truncate(node.depth + 1)
        try:
            if reread_owner:
                node.release_container()
                self._resolve(node)
            else:
                node.release_value()
                self._resolve_element(node)
            self._build(node.depth + 1, node.value)
        except Exception as e:
            if self._on_error is None:
                raise
            self._on_error(e)
            return
        self._on_change()

    # Teardown

    def dispose(self) -> None:
        """Unregister the whole chain. Safe to call more than once."""
        if self._disposed:
            return
        self._truncate(0)
        self._disposed = True
