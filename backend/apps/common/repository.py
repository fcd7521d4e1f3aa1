from typing import Generic, Iterable, List, Optional, Type, TypeVar

from django.db import models

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Find/create/save/delete primitives shared by every table-backed repository."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.model.objects.filter(**filters)

    def list_by_ids(self, ids: Iterable[int]) -> List[T]:
        ids = list(ids)
        if not ids:
            return []
        return list(self.model.objects.filter(pk__in=ids))

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def save(self, obj: T) -> T:
        obj.save()
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
