"""
Collection Synthesizer

Builds collections by repeatedly dispatching on the element type:
- Lists, deques, iterators and variable-length tuples
- Fixed-arity tuples (one value per position)
- Sets and frozensets (distinct elements)
- Dicts (keys and values synthesized independently)
- Custom enumerables: list/set/dict subclasses and generic classes with
  append/add, built empty and then filled
- Infinite generators and single-item selection
"""

import collections.abc as abc
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .base import GeneratorBase, DistributionLike
from ..descriptors import CollectionKind, CollectionShape, collection_shape, unwrap
from ..distribution import Distribution
from ..exceptions import PopulationFailureError

logger = logging.getLogger(__name__)

# Draws allowed per requested element when elements must be distinct
UNIQUE_DRAWS_PER_ELEMENT = 10

ElementFactory = Callable[[Any], Any]


class CollectionData(GeneratorBase):
    """Synthesizes sequences, sets, mappings and custom enumerables"""

    def _element(self, element_type: Any, factory: Optional[ElementFactory], option) -> Any:
        if factory is not None:
            return factory(self)
        return self.any(element_type, option)

    def _collection_length(self, min_length: Optional[int], max_length: Optional[int]) -> int:
        collections = self.config.collections
        return self._length(min_length, max_length, collections.min_length, collections.max_length)

    def any_enumerable(
        self,
        element_type: Any = str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        factory: Optional[ElementFactory] = None,
        option=None
    ) -> List[Any]:
        """
        Generate a list of elements

        Args:
            element_type: Type descriptor of each element
            min_length: Minimum length (config default, 2, when None)
            max_length: Maximum length (config default, 10, when None)
            factory: Optional callable(anon) producing each element instead of dispatch
            option: Population option passed to element dispatch

        Returns:
            A list whose length is uniform in [min_length, max_length]
        """
        length = self._collection_length(min_length, max_length)
        return [self._element(element_type, factory, option) for _ in range(length)]

    def any_infinite_enumerable(
        self,
        element_type: Any = str,
        factory: Optional[ElementFactory] = None,
        option=None
    ) -> Iterator[Any]:
        """Endless generator of elements; each is synthesized on demand"""
        while True:
            yield self._element(element_type, factory, option)

    def _distinct(self, element_type: Any, length: int, factory: Optional[ElementFactory], option) -> List[Any]:
        """Up to length distinct elements; small domains (bool, tiny enums) may yield fewer"""
        values: List[Any] = []
        seen = set()
        for _ in range(max(length, 1) * UNIQUE_DRAWS_PER_ELEMENT):
            if len(values) >= length:
                break
            value = self._element(element_type, factory, option)
            if value not in seen:
                seen.add(value)
                values.append(value)
        return values

    def any_dict(
        self,
        key_type: Any = str,
        value_type: Any = str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        option=None
    ) -> Dict[Any, Any]:
        """
        Generate a dict with independently synthesized keys and values

        Args:
            key_type: Type descriptor of the keys
            value_type: Type descriptor of the values
            min_length: Minimum length (config default when None)
            max_length: Maximum length (config default when None)
            option: Population option passed to key and value dispatch

        Returns:
            A dict; keys are distinct, so small key domains can give fewer entries
        """
        length = self._collection_length(min_length, max_length)
        keys = self._distinct(key_type, length, None, option)
        return {key: self.any(value_type, option) for key in keys}

    def any_item(self, sequence: Iterable[Any], distribution: DistributionLike = None) -> Any:
        """
        Pick one element of a finite iterable (dicts yield their keys)

        Raises:
            ValueError: The sequence is empty
        """
        items = sequence if isinstance(sequence, abc.Sequence) else list(sequence)
        if len(items) == 0:
            raise ValueError("Cannot pick an item from an empty sequence")
        return items[self._int_between(0, len(items) - 1, distribution or Distribution.UNIFORM)]

    def build_collection(self, shape: CollectionShape, option=None) -> Any:
        """
        Build the collection a descriptor's shape describes

        Args:
            shape: Resolved collection shape
            option: Population option for element dispatch

        Returns:
            A new collection instance
        """
        kind = shape.kind

        if kind is CollectionKind.TUPLE:
            return tuple(self.any(element_type, option) for element_type in shape.element_types)

        if kind is CollectionKind.DICT:
            key_type, value_type = shape.element_types
            return shape.container(self.any_dict(key_type, value_type, option=option))

        if kind in (CollectionKind.SET, CollectionKind.FROZENSET):
            length = self._collection_length(None, None)
            return shape.container(self._distinct(shape.element_types[0], length, None, option))

        if kind is CollectionKind.CUSTOM:
            try:
                collection = shape.container()
            except Exception as e:
                raise PopulationFailureError(shape.container, None, e) from e
            return self._fill(collection, shape, option)

        return shape.container(self.any_enumerable(shape.element_types[0], option=option))

    def extend_collection(self, collection: Any, type_: Any = None, option=None) -> Any:
        """
        Append synthesized elements to an existing mutable collection

        Args:
            collection: List, set, dict, deque or object with append/add
            type_: Collection type descriptor giving the element types
                   (the collection's own type when None)
            option: Population option for element dispatch

        Returns:
            The same collection
        """
        shape = collection_shape(unwrap(type_)) if type_ is not None else None
        if shape is None:
            shape = collection_shape(type(collection))
        if shape is None:
            shape = CollectionShape(CollectionKind.CUSTOM, type(collection), (str,))
        return self._fill(collection, shape, option)

    def _fill(self, collection: Any, shape: CollectionShape, option) -> Any:
        length = self._collection_length(None, None)

        if isinstance(collection, dict):
            key_type, value_type = (tuple(shape.element_types) + (str, str))[:2]
            if len(shape.element_types) == 1:
                value_type = str
            collection.update(self.any_dict(key_type, value_type, option=option))
            return collection

        element_type = shape.element_types[0] if shape.element_types else str

        if isinstance(collection, (set, frozenset)) or (
            not callable(getattr(collection, 'append', None)) and callable(getattr(collection, 'add', None))
        ):
            add = getattr(collection, 'add', None)
            if add is None:
                raise PopulationFailureError(type(collection), None, TypeError("collection is immutable"))
            for value in self._distinct(element_type, length, None, option):
                add(value)
            return collection

        append = getattr(collection, 'append', None)
        if append is None:
            raise PopulationFailureError(type(collection), None, TypeError("collection has no append or add method"))

        for value in self.any_enumerable(element_type, length, length, option=option):
            append(value)

        logger.debug(f"Appended {length} elements to {type(collection).__name__}")
        return collection
