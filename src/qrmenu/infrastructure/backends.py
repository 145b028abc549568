from __future__ import annotations

from qrmenu.application.ports.backend import MenuBackend
from qrmenu.infrastructure.db.repositories.menu_backend import SqlAlchemyMenuBackend
from qrmenu.infrastructure.settings import BACKEND_SQL, menu_backend_kind
from qrmenu.infrastructure.supabase.backend import SupabaseRestBackend


def build_menu_backend(kind: str | None = None) -> MenuBackend:
    if (kind or menu_backend_kind()) == BACKEND_SQL:
        return SqlAlchemyMenuBackend()
    return SupabaseRestBackend()
