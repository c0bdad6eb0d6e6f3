"""
Base schemas for API requests.

Provides a base class that eliminates code duplication across
all request models.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class BaseRequest(BaseModel):
    """
    Base class for all request models.

    Provides common functionality including:
    - to_dict() method with enum conversion
    - Rejection of unknown fields
    """

    model_config = ConfigDict(extra="forbid", use_enum_values=False)

    def to_dict(self) -> Dict[str, Any]:
        """
        Export parameters to a dictionary for service calls.

        Enum values are converted to their string values.

        Example:
            >>> EffectRequest(effect=EffectType.MOSAIC, seeds=100).to_dict()
            {'effect': 'mosaic', 'seeds': 100}
        """
        data = self.model_dump(exclude_none=True)

        # Convert enum values to strings
        for key, value in data.items():
            if hasattr(value, "value"):
                data[key] = value.value

        return data
