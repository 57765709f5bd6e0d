from app.core.exceptions import DuplicateEntryError
from app.crud.base import CRUDBase, utcnow
from app.models.user import User
from app.schemas.user import UserUpsert
from app.store.base import EntityStore

class CRUDUser(CRUDBase[User, UserUpsert]):
    def upsert(self, store: EntityStore, obj_in: UserUpsert) -> User:
        profile = obj_in.model_dump(exclude={"id"})

        with store.guard(f"user:{obj_in.id}"):
            now = utcnow()
            existing = self.get(store, obj_in.id)
            if existing:
                return self.update(store, db_obj=existing, obj_in={**profile, "updated_at": now})
            try:
                return self.create(store, obj_in={"id": obj_in.id, **profile, "created_at": now, "updated_at": now})
            except DuplicateEntryError:
                # Another worker inserted the same id after our read
                winner = self.records(store).get(obj_in.id)
                if winner is None:
                    raise
                return self.update(store, db_obj=winner, obj_in={**profile, "updated_at": now})

user = CRUDUser(User, "users")
