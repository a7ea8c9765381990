"""Response models for write and read acknowledgments."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedResponseError


class Ack(BaseModel):
    """Acknowledgment of index / update / delete."""

    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(alias="_index")
    id: str = Field(alias="_id")
    version: int = Field(alias="_version")
    result: str  # created | updated | deleted | noop


class Got(BaseModel):
    """A document fetched by id."""

    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(alias="_index")
    id: str = Field(alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    source: Any = Field(default=None, alias="_source")


def parse_response(model: type[BaseModel], response: Any) -> Any:
    """Validate a raw client response into *model*.

    Raises:
        MalformedResponseError: if the response does not match the model.
    """
    try:
        return model.model_validate(response)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"response is not a valid {model.__name__}: {response!r}"
        ) from exc
