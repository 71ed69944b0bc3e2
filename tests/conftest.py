"""
Fixtures compartidas: settings de prueba, fakes en memoria y un
cliente de Supabase que registra las llamadas al query builder.
"""

import time
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Optional

import pytest

from inmo.config import Settings, get_settings
from inmo.models import (
    Favorite,
    PreferenceProfile,
    Property,
    SavedSearch,
    SearchCriteria,
    Viewing,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_property(id: str = "p1", days: int = 0, **overrides) -> Property:
    """Propiedad con valores por defecto razonables; `days` desplaza created_at."""
    data = {
        "id": id,
        "title": f"Property {id}",
        "property_type": "apartment",
        "listing_type": "sale",
        "status": "active",
        "price": 1_000_000,
        "city": "Pune",
        "locality": "Baner",
        "bedrooms": 3,
        "carpet_area": 1000,
        "created_at": BASE_TIME + timedelta(days=days),
    }
    data.update(overrides)
    return Property(**data)


def saved_search(user_id: str = "u1", **criteria) -> SavedSearch:
    return SavedSearch(
        user_id=user_id,
        name="search",
        search_criteria=SearchCriteria.model_validate(criteria),
    )


@pytest.fixture(autouse=True)
def supabase_env(monkeypatch):
    """Credenciales ficticias para que Settings() no falle."""
    monkeypatch.setenv("SUPABASE_URL", "http://localhost:54321")
    monkeypatch.setenv("SUPABASE_KEY", "test-anon-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(supabase_url="http://localhost:54321", supabase_key="test-anon-key")


class InMemoryCatalog:
    """Catálogo en memoria con la misma semántica que PropertyRepository."""

    def __init__(self, properties: list[Property], fail: bool = False):
        self.properties = properties
        self.fail = fail
        self.candidate_calls: list[tuple[PreferenceProfile, list[str], int]] = []

    def get_by_id(self, property_id: str) -> Optional[Property]:
        if self.fail:
            raise ConnectionError("database unavailable")
        return next((p for p in self.properties if p.id == property_id), None)

    def find_candidates(self, profile, exclude_ids=None, limit=10):
        if self.fail:
            raise ConnectionError("database unavailable")
        exclude_ids = list(exclude_ids or [])
        self.candidate_calls.append((profile, exclude_ids, limit))

        rows = [p for p in self.properties if p.status == "active"]
        if profile.preferred_cities:
            rows = [p for p in rows if p.city in profile.preferred_cities]
        if profile.preferred_types:
            rows = [p for p in rows if p.property_type in profile.preferred_types]
        if profile.budget_min is not None:
            rows = [p for p in rows if p.price is not None and p.price >= profile.budget_min]
        if profile.budget_max is not None:
            rows = [p for p in rows if p.price is not None and p.price <= profile.budget_max]
        if profile.min_bedrooms is not None:
            rows = [p for p in rows if p.bedrooms is not None and p.bedrooms >= profile.min_bedrooms]
        if exclude_ids:
            rows = [p for p in rows if p.id not in exclude_ids]

        rows.sort(key=lambda p: p.created_at, reverse=True)
        return rows[:limit]

    def find_in_city(self, city, exclude_id=None, limit=20):
        if self.fail:
            raise ConnectionError("database unavailable")
        rows = [
            p for p in self.properties
            if p.status == "active" and p.city == city and p.id != exclude_id
        ]
        return rows[:limit]


class FakeActivity:
    """Actividad de un usuario en memoria."""

    def __init__(
        self,
        viewed: Optional[list[Property]] = None,
        favorited: Optional[list[Property]] = None,
        searches: Optional[list[SavedSearch]] = None,
        fail: bool = False,
        delay: float = 0.0,
    ):
        self.viewed = viewed or []
        self.favorited = favorited or []
        self.searches = searches or []
        self.fail = fail
        self.delay = delay
        self.limits: dict[str, int] = {}

    def _check(self):
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise ConnectionError("database unavailable")

    def recent_viewings(self, user_id, limit=20):
        self._check()
        self.limits["viewings"] = limit
        return [Viewing(user_id=user_id, property_id=p.id, property=p) for p in self.viewed][:limit]

    def recent_favorites(self, user_id, limit=20):
        self._check()
        self.limits["favorites"] = limit
        return [Favorite(user_id=user_id, property_id=p.id, property=p) for p in self.favorited][:limit]

    def recent_saved_searches(self, user_id, limit=5):
        self._check()
        self.limits["saved_searches"] = limit
        return self.searches[:limit]


class RecordingQuery:
    """
    Imita el query builder de postgrest: cada método encadenable
    queda registrado en `calls` y `execute()` devuelve `rows`.

    Con `responses`, cada `execute()` consume la siguiente lista de
    filas y, agotadas, vuelve a `rows`.
    """

    def __init__(
        self,
        rows: Optional[list[dict]] = None,
        count: Optional[int] = None,
        responses: Optional[list[list[dict]]] = None,
    ):
        self.rows = rows if rows is not None else []
        self.responses = list(responses or [])
        self.count = count
        self.calls: list[tuple[str, tuple, dict]] = []
        self._negated = False

    @property
    def not_(self):
        self._negated = True
        return self

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def method(*args, **kwargs):
            call_name = f"not_.{name}" if self._negated else name
            self._negated = False
            self.calls.append((call_name, args, kwargs))
            return self

        return method

    def execute(self):
        rows = self.responses.pop(0) if self.responses else self.rows
        return SimpleNamespace(data=rows, count=self.count)

    def called(self, name: str) -> list[tuple]:
        """Argumentos posicionales de cada llamada a `name`."""
        return [args for call_name, args, _ in self.calls if call_name == name]

    def kwargs_of(self, name: str) -> list[dict]:
        return [kwargs for call_name, _, kwargs in self.calls if call_name == name]


class FakeSupabaseClient:
    """Sustituto de SupabaseClient para los repositorios."""

    def __init__(self):
        self.tables: dict[str, RecordingQuery] = {}
        self.rpc_calls: list[tuple[str, dict]] = []

    def set_rows(
        self,
        table: str,
        rows: list[dict],
        count: Optional[int] = None,
        responses: Optional[list[list[dict]]] = None,
    ) -> RecordingQuery:
        self.tables[table] = RecordingQuery(rows, count, responses)
        return self.tables[table]

    def table(self, name: str) -> RecordingQuery:
        return self.tables.setdefault(name, RecordingQuery())

    def execute_rpc(self, function_name: str, params: Optional[dict] = None) -> list:
        self.rpc_calls.append((function_name, params or {}))
        return []


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()
