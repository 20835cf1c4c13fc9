import uuid
from typing import Optional
from resume_builder.parsers.types import IdFactory


def random_id() -> str:
    return uuid.uuid4().hex[:9]


def resolve_id_factory(id_factory: Optional[IdFactory]) -> IdFactory:
    return id_factory or random_id
