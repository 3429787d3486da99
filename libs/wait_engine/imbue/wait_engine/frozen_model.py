from pydantic import BaseModel
from pydantic import ConfigDict


class FrozenModel(BaseModel):
    """Base class for immutable wait-engine models.

    Arbitrary types are allowed because specs and outcomes hold exception classes,
    exception instances and opaque probe values.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )
