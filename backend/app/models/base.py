"""
Базовая модель для DTO бэкенда (camelCase на проводе).
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Модель с camelCase алиасами; принимает и snake_case имена."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    def to_payload(self) -> dict:
        """Сериализует модель для отправки в бэкенд."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
