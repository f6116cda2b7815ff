"""Lazy collection of virtual elements sharing one selector."""

from typing import Iterator, List, TYPE_CHECKING

from vigil.layers.action.element import VirtualElement
from vigil.layers.sense.resolver import SelectorLocator

if TYPE_CHECKING:
    from vigil.layers.action.dispatcher import OperationDispatcher


class ElementCollection:
    """
    All elements matching a selector, resolved on use.

    Indexing returns a virtual element for that ordinal; len() counts the
    current matches.
    """

    def __init__(self, locator: SelectorLocator, dispatcher: "OperationDispatcher"):
        self.locator = locator
        self._dispatcher = dispatcher

    def __getitem__(self, index: int) -> VirtualElement:
        if index < 0:
            index += len(self)
            if index < 0:
                raise IndexError("collection index out of range")
        return VirtualElement(
            SelectorLocator(self.locator.selector, index, self.locator.parent),
            self._dispatcher,
        )

    def __len__(self) -> int:
        return self._dispatcher.resolver.count(self.locator)

    def __iter__(self) -> Iterator[VirtualElement]:
        for index in range(len(self)):
            yield self[index]

    def first(self) -> VirtualElement:
        return self[0]

    def texts(self) -> List[str]:
        return [element.text() for element in self]

    def __repr__(self) -> str:
        return f"ElementCollection({self.locator.describe()})"
