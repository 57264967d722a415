"""Shared pydantic base for API payloads.

Learn: Field names are snake_case in Python and camelCase on the wire
(``to_user_id`` ↔ ``toUserId``). ``populate_by_name`` lets request bodies
use either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
