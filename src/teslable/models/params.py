"""Typed request parameters for action commands.

Request bodies arrive as loosely typed JSON objects whose values are
strings (``{"charging_amps": "16"}``). Each command that needs input has
a dedicated model here; :meth:`CommandParams.from_body` is the single
decode-and-validate step handlers call before touching the vehicle.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Self

from pydantic import BaseModel, BeforeValidator, ConfigDict, StrictStr, ValidationError

from teslable.exceptions import CommandParamsError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")


def parse_int32_string(value: Any) -> int:
    """Parse a string-encoded base-10 integer that fits into 32 bits.

    Only strings are accepted: a JSON number is a type error, as are
    surrounding whitespace and digit separators.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected a string-encoded integer, got {type(value).__name__}")
    if not _DECIMAL_INT.fullmatch(value):
        raise ValueError(f"invalid integer {value!r}")
    parsed = int(value)
    if not _INT32_MIN <= parsed <= _INT32_MAX:
        raise ValueError(f"integer {value!r} out of range")
    return parsed


Int32String = Annotated[int, BeforeValidator(parse_int32_string)]
"""Annotated type for string-encoded 32-bit integers."""


class CommandParams(BaseModel):
    """Base class for command parameter models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_default=True,
    )

    command: ClassVar[str] = ""

    @classmethod
    def from_body(cls, body: Mapping[str, Any] | None) -> Self:
        """Validate the decoded request body.

        ``None`` (request without body) is treated as an empty mapping.
        Raises :class:`~teslable.exceptions.CommandParamsError` on a
        missing key or invalid value.
        """
        try:
            return cls.model_validate(dict(body or {}))
        except ValidationError as exc:
            raise CommandParamsError(_describe(exc), command=cls.command) from exc


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    if error.get("type") == "missing":
        return f"failed to find {field} in request body"
    return f"failed to parse {field}: {error.get('msg', 'invalid value')}"


class ChargingAmpsParams(CommandParams):
    """Parameters of ``set_charging_amps``."""

    command: ClassVar[str] = "set_charging_amps"

    charging_amps: Int32String


class SocLimitParams(CommandParams):
    """Parameters of ``set_soc_limit``."""

    command: ClassVar[str] = "set_soc_limit"

    soc_limit: Int32String


class ChargeEnableParams(CommandParams):
    """Parameters of ``charge``.

    Only the literal string ``"true"`` starts charging; every other
    string stops it.
    """

    command: ClassVar[str] = "charge"

    enable: StrictStr

    @property
    def start(self) -> bool:
        return self.enable == "true"
