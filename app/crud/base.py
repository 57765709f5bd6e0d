import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from app.core.database import Base
from app.store.base import EntityCollection, EntityStore

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

def utcnow() -> datetime:
    # Naive UTC, so values compare the same before and after a database round trip
    return datetime.now(timezone.utc).replace(tzinfo=None)

def new_id() -> str:
    return str(uuid.uuid4())

class CRUDBase(Generic[ModelType, CreateSchemaType]):
    def __init__(self, model: Type[ModelType], collection: str):
        self.model = model
        self.collection = collection

    def records(self, store: EntityStore) -> EntityCollection[ModelType]:
        return getattr(store, self.collection)

    def get(self, store: EntityStore, id: Any) -> Optional[ModelType]:
        return self.records(store).get(id)

    def get_multi(self, store: EntityStore, *, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self.records(store).all(order_by=order_by)

    def create(self, store: EntityStore, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        if isinstance(obj_in, dict):
            obj_in_data = obj_in
        else:
            obj_in_data = jsonable_encoder(obj_in, by_alias=False)
        obj_in_data.setdefault("id", new_id())
        db_obj = self.model(**obj_in_data)
        return self.records(store).add(db_obj)

    def update(
        self, store: EntityStore, *, db_obj: ModelType, obj_in: Union[CreateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump()
        return self.records(store).update(db_obj, update_data)

    def delete(self, store: EntityStore, *, db_obj: ModelType) -> ModelType:
        self.records(store).remove(db_obj)
        return db_obj
