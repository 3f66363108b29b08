"""Base filter class using Pydantic BaseModel."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import InvalidParamsError


class BaseFilter(BaseModel, ABC):
    """Base class for all pipeline stages.

    A stage holds its parameters as (frozen) model fields and exposes a pure
    ``apply()`` which returns a new buffer or mask. Subclasses register
    themselves by ``filter_type`` so that a configured stage can be restored
    from its serialized form.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra='ignore',
        arbitrary_types_allowed=True,
    )

    # ClassVar metadata (not serialized as fields)
    filter_type: ClassVar[str] = "base"
    name: ClassVar[str] = "Base Filter"
    description: ClassVar[str] = "Base filter description"
    VERSION: ClassVar[int] = 1

    # Registry of filter classes by filter_type
    _registry: ClassVar[dict[str, type['BaseFilter']]] = {}

    def __init_subclass__(cls, **kwargs):
        """Register filter subclass in registry."""
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get('filter_type', 'base') != "base":
            BaseFilter._registry[cls.filter_type] = cls

    @abstractmethod
    def apply(self, *inputs: Any) -> Any:
        """Apply the stage.

        Params are instance attributes, not **kwargs.

        Returns:
            A new PixelBuffer or Mask; the inputs are never modified
        """
        pass

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the stage and its parameters."""
        return {
            'filterId': self.filter_type,
            'name': self.name,
            'version': self.VERSION,
            'params': self.model_dump(mode='json'),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'BaseFilter':
        """Deserialize from the ``to_dict()`` format."""
        filter_type = data.get('filterId') or data.get('type', 'base')
        filter_cls = cls._registry.get(filter_type)
        if filter_cls is None:
            raise InvalidParamsError(f"Unknown filter type: {filter_type}")
        try:
            return filter_cls.model_validate(data.get('params', {}))
        except ValidationError as e:
            raise InvalidParamsError(f"Invalid parameters for {filter_type}: {e}") from e

    @classmethod
    def registered(cls) -> dict[str, type['BaseFilter']]:
        """All registered stage classes by filter type."""
        return dict(cls._registry)
