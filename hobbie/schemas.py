"""
Serialization schemas using Marshmallow for the Hobbie backend.

``HobbySchema`` converts ``Hobby`` rows into JSON-friendly
representations, with the category and location flattened to their
enum values. ``HobbyPayloadSchema`` validates the body of create and
update requests before a ``Hobby`` is built from it.
"""

from __future__ import annotations

from marshmallow import Schema, fields, validate, post_load
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema

from .models import Hobby, CategoryNameEnum, LocationEnum
from .util.sanitization import strip_tags


class HobbySchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``Hobby`` objects."""

    category = fields.Function(lambda hobby: hobby.category.name.value if hobby.category else None)
    location = fields.Function(lambda hobby: hobby.location.name.value if hobby.location else None)
    price = fields.Float(allow_none=True)

    class Meta:
        model = Hobby
        load_instance = False


class HobbyPayloadSchema(Schema):
    """Validates the JSON body used to create or update a hobby."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    slogan = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=255))
    intro = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=255))
    description = fields.String(load_default=None, allow_none=True)
    price = fields.Decimal(load_default=None, allow_none=True, places=2, validate=validate.Range(min=0))
    contact_info = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=255))
    category = fields.Enum(CategoryNameEnum, required=True)
    location = fields.Enum(LocationEnum, required=True)

    profile_img_url = fields.String(load_default=None, allow_none=True)
    profile_img_id = fields.String(load_default=None, allow_none=True)
    gallery_img1_url = fields.String(load_default=None, allow_none=True)
    gallery_img1_id = fields.String(load_default=None, allow_none=True)
    gallery_img2_url = fields.String(load_default=None, allow_none=True)
    gallery_img2_id = fields.String(load_default=None, allow_none=True)
    gallery_img3_url = fields.String(load_default=None, allow_none=True)
    gallery_img3_id = fields.String(load_default=None, allow_none=True)

    @post_load
    def clean_text(self, data: dict, **kwargs) -> dict:
        for field in ("name", "slogan", "intro", "description", "contact_info"):
            if data.get(field):
                data[field] = strip_tags(data[field])
        return data
