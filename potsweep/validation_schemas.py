"""
Validation schemas for the operations file using marshmallow.

The file holds a list of single-key objects, the key naming the operation:

    [
        {"sweep": {"account_goal": 100, "pots": ["bills", "savings"]}},
        {"ratio": {"pots": {"holiday": 1, "savings": 2}}}
    ]
"""

import logging
from typing import Any, Dict, List

from marshmallow import RAISE, Schema, ValidationError, fields, post_load, validate

from potsweep.automation import Operation, Ratio, Sweep, operation_name

logger = logging.getLogger(__name__)


class SweepSchema(Schema):
    """Schema for a sweep operation"""

    class Meta:
        unknown = RAISE

    account_id = fields.String(
        load_default=None, allow_none=True, validate=validate.Length(min=1, max=100)
    )
    account_goal = fields.Integer(strict=True, load_default=0)
    pots = fields.List(
        fields.String(validate=validate.Length(min=1, max=200)),
        required=True,
    )

    @post_load
    def make_operation(self, data: Dict[str, Any], **kwargs) -> Sweep:
        return Sweep(**data)


class RatioSchema(Schema):
    """Schema for a ratio operation"""

    class Meta:
        unknown = RAISE

    account_id = fields.String(
        load_default=None, allow_none=True, validate=validate.Length(min=1, max=100)
    )
    account_goal = fields.Integer(strict=True, load_default=0)
    pots = fields.Dict(
        keys=fields.String(validate=validate.Length(min=1, max=200)),
        values=fields.Integer(strict=True, validate=validate.Range(min=1)),
        required=True,
        validate=validate.Length(min=1),
    )

    @post_load
    def make_operation(self, data: Dict[str, Any], **kwargs) -> Ratio:
        return Ratio(**data)


OPERATION_SCHEMAS = {
    "sweep": SweepSchema,
    "ratio": RatioSchema,
}


class OperationSchema(Schema):
    """Schema for one tagged entry of the operations file"""

    class Meta:
        unknown = RAISE

    sweep = fields.Nested(SweepSchema)
    ratio = fields.Nested(RatioSchema)

    @post_load
    def unwrap(self, data: Dict[str, Any], **kwargs) -> Operation:
        if len(data) != 1:
            raise ValidationError(
                f"expected exactly one of {sorted(OPERATION_SCHEMAS)}, got {sorted(data)}"
            )
        return next(iter(data.values()))


def load_operations(data: Any) -> List[Operation]:
    """
    Validate the parsed operations file and build the operations it lists.

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(data, list):
        raise ValidationError("the operations file must contain a list")
    try:
        return OperationSchema(many=True).load(data)
    except ValidationError as e:
        logger.warning(f"Operations file validation failed: {e.messages}")
        raise


def dump_operation(op: Operation) -> Dict[str, Any]:
    """The tagged, file-shaped form of an operation."""
    tag = operation_name(op).lower()
    return {tag: OPERATION_SCHEMAS[tag]().dump(op)}
