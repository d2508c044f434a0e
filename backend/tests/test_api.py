from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from backend.app.core.config import get_settings
from backend.app.core.security import create_access_token
from backend.app.main import create_app


def _client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("THEATER_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("THEATER_SECRET_KEY", "test-secret-key-with-at-least-32-bytes")
    monkeypatch.setenv("THEATER_BCRYPT_ROUNDS", "4")

    get_settings.cache_clear()
    app = create_app()
    return TestClient(app)


def _register(client: TestClient, email: str = "a@x.com") -> dict[str, str]:
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": email, "password": "pw123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['user']['token']}"}


def _create_actor(client: TestClient, headers: dict[str, str], name: str = "Ivan Franko", **extra) -> dict:
    response = client.post("/api/actors", json={"name": name, **extra}, headers=headers)
    assert response.status_code == 201
    return response.json()


def _create_performance(client: TestClient, headers: dict[str, str], cast: list[dict] | None = None, **extra) -> dict:
    payload = {"name": "Hamlet", "year": 1990, "budget": 5000, **extra}
    if cast is not None:
        payload["cast"] = cast
    response = client.post("/api/performances", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def _create_employment(
    client: TestClient, headers: dict[str, str], actor_id: str, performance_id: str, role: str = "Ghost"
) -> dict:
    response = client.post(
        "/api/employments",
        json={"actor": actor_id, "performance": performance_id, "role": role, "annualContractValue": 1200},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def test_health_endpoint_is_public(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


def test_register_and_login_flow(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        registered = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "a@x.com", "password": "pw123"},
        )
        assert registered.status_code == 201
        body = registered.json()
        assert body["ok"] is True
        assert body["user"]["username"] == "alice"
        assert body["user"]["email"] == "a@x.com"
        assert body["user"]["role"] == "user"
        assert body["user"]["token"]

        wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong"})
        assert wrong_password.status_code == 401
        unknown_email = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "pw123"})
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid email or password"}

        logged_in = client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw123"})
        assert logged_in.status_code == 200
        token = logged_in.json()["user"]["token"]
        assert logged_in.json()["user"]["id"] == body["user"]["id"]

        actors = client.get("/api/actors", headers={"Authorization": f"Bearer {token}"})
        assert actors.status_code == 200
        assert actors.json() == []


def test_register_rejects_duplicate_email(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        _register(client)
        duplicate = client.post(
            "/api/auth/register",
            json={"username": "alice2", "email": "A@X.com", "password": "other"},
        )
        assert duplicate.status_code == 400
        assert "already registered" in duplicate.json()["detail"]


def test_register_rejects_missing_fields(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        response = client.post("/api/auth/register", json={"email": "a@x.com", "password": "pw123"})
        assert response.status_code == 400


@pytest.mark.parametrize("path", ["/api/actors", "/api/performances", "/api/employments", "/users"])
def test_protected_paths_reject_missing_or_garbled_tokens(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, path: str
) -> None:
    with _client(tmp_path, monkeypatch) as client:
        missing = client.get(path)
        assert missing.status_code == 401
        assert missing.headers["www-authenticate"] == "Bearer"

        garbled = client.get(path, headers={"Authorization": "Bearer not-a-token"})
        assert garbled.status_code == 401

        wrong_scheme = client.get(path, headers={"Authorization": "Basic YTpi"})
        assert wrong_scheme.status_code == 401


def test_expired_token_is_rejected_before_entity_logic(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        registered = client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "a@x.com", "password": "pw123"},
        )
        user_id = registered.json()["user"]["id"]
        settings = get_settings()
        expired = create_access_token(user_id, settings.secret_key, ttl=timedelta(seconds=-30))

        response = client.post(
            "/api/actors",
            json={"name": "Should Not Exist"},
            headers={"Authorization": f"Bearer {expired}"},
        )
        assert response.status_code == 401

        headers = {"Authorization": f"Bearer {registered.json()['user']['token']}"}
        assert client.get("/api/actors", headers=headers).json() == []


def test_token_for_unknown_user_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        token = create_access_token(str(uuid4()), get_settings().secret_key)
        response = client.get("/api/actors", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


def test_actor_crud_round_trip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)

        created = _create_actor(client, headers, name="Les Kurbas", rank="People's Artist")
        assert created["experience"] == 0
        actor_id = created["id"]

        loaded = client.get(f"/api/actors/{actor_id}", headers=headers)
        assert loaded.status_code == 200
        assert loaded.json()["rank"] == "People's Artist"

        updated = client.put(f"/api/actors/{actor_id}", json={"experience": 12}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["experience"] == 12
        assert updated.json()["name"] == "Les Kurbas"

        negative = client.put(f"/api/actors/{actor_id}", json={"experience": -1}, headers=headers)
        assert negative.status_code == 400

        missing = client.get(f"/api/actors/{uuid4()}", headers=headers)
        assert missing.status_code == 404
        assert client.put(f"/api/actors/{uuid4()}", json={"name": "x"}, headers=headers).status_code == 404


def test_actor_update_overwrites_present_fields_only(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers, name="Amvrosii Buchma", rank="Lead", experience=20)

        cleared = client.put(f"/api/actors/{actor['id']}", json={"rank": None}, headers=headers)
        assert cleared.status_code == 200
        assert cleared.json()["rank"] is None
        assert cleared.json()["name"] == "Amvrosii Buchma"
        assert cleared.json()["experience"] == 20
        assert client.get(f"/api/actors/{actor['id']}", headers=headers).json()["rank"] is None

        for body in ({"name": None}, {"experience": None}):
            rejected = client.put(f"/api/actors/{actor['id']}", json=body, headers=headers)
            assert rejected.status_code == 400

        loaded = client.get(f"/api/actors/{actor['id']}", headers=headers).json()
        assert loaded["name"] == "Amvrosii Buchma"
        assert loaded["experience"] == 20


def test_actor_experience_beyond_storage_range_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)

        created = client.post("/api/actors", json={"name": "X", "experience": 10**20}, headers=headers)
        assert created.status_code == 400

        actor = _create_actor(client, headers, experience=2**63 - 1)
        assert actor["experience"] == 2**63 - 1

        updated = client.put(f"/api/actors/{actor['id']}", json={"experience": 2**63}, headers=headers)
        assert updated.status_code == 400
        assert client.get("/api/actors", headers=headers).json()[0]["experience"] == 2**63 - 1


def test_actor_listing_expands_employments_with_performances(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)
        idle_actor = _create_actor(client, headers, name="Understudy")
        performance = _create_performance(client, headers, name="Marusia Churai", year=1989, budget=7000)
        _create_employment(client, headers, actor["id"], performance["id"], role="Hrytsko")

        listed = client.get("/api/actors", headers=headers)
        assert listed.status_code == 200
        by_id = {item["id"]: item for item in listed.json()}

        assert by_id[idle_actor["id"]]["employments"] == []
        employments = by_id[actor["id"]]["employments"]
        assert len(employments) == 1
        assert employments[0]["role"] == "Hrytsko"
        assert employments[0]["actor"] == actor["id"]
        assert employments[0]["performance"]["id"] == performance["id"]
        assert employments[0]["performance"]["budget"] == 7000


def test_create_performance_with_cast(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers, name="A1", rank="Lead")

        created = _create_performance(
            client,
            headers,
            cast=[{"actor": actor["id"], "role": "Hamlet", "annualContractValue": 1000}],
        )
        assert created["name"] == "Hamlet"
        assert created["year"] == 1990
        assert created["budget"] == 5000
        assert len(created["cast"]) == 1

        member = created["cast"][0]
        assert member["performance"] == created["id"]
        assert member["actor"] == {"id": actor["id"], "name": "A1", "rank": "Lead"}
        assert member["role"] == "Hamlet"
        assert member["annualContractValue"] == 1000

        by_performance = client.get(f"/api/employments/performance/{created['id']}", headers=headers)
        assert by_performance.status_code == 200
        assert [item["id"] for item in by_performance.json()] == [member["id"]]
        assert by_performance.json()[0]["actor"]["name"] == "A1"


def test_cast_entry_performance_reference_is_overridden(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)

        created = _create_performance(
            client,
            headers,
            cast=[
                {
                    "actor": actor["id"],
                    "performance": str(uuid4()),
                    "role": "Ophelia",
                    "annualContractValue": 900,
                }
            ],
        )
        assert created["cast"][0]["performance"] == created["id"]


def test_invalid_cast_entry_creates_nothing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)

        missing_role = client.post(
            "/api/performances",
            json={
                "name": "Hamlet",
                "year": 1990,
                "budget": 5000,
                "cast": [
                    {"actor": actor["id"], "role": "Hamlet", "annualContractValue": 1000},
                    {"actor": actor["id"], "annualContractValue": 1000},
                ],
            },
            headers=headers,
        )
        assert missing_role.status_code == 400

        malformed_reference = client.post(
            "/api/performances",
            json={
                "name": "Hamlet",
                "year": 1990,
                "budget": 5000,
                "cast": [{"actor": "not-an-id", "role": "Hamlet", "annualContractValue": 1000}],
            },
            headers=headers,
        )
        assert malformed_reference.status_code == 400

        assert client.get("/api/performances", headers=headers).json() == []
        assert client.get("/api/employments", headers=headers).json() == []


def test_performance_creation_rolls_back_when_employment_insert_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        first = _create_actor(client, headers, name="First")
        second = _create_actor(client, headers, name="Second")

        repository = client.app.state.container.employment_repository
        original_create = repository.create
        calls = {"count": 0}

        def failing_create(document, db=None):
            calls["count"] += 1
            if calls["count"] == 2:
                raise OperationalError("INSERT INTO employments", {}, Exception("disk I/O error"))
            return original_create(document, db=db)

        monkeypatch.setattr(repository, "create", failing_create)

        response = client.post(
            "/api/performances",
            json={
                "name": "Hamlet",
                "year": 1990,
                "budget": 5000,
                "cast": [
                    {"actor": first["id"], "role": "Hamlet", "annualContractValue": 1000},
                    {"actor": second["id"], "role": "Claudius", "annualContractValue": 800},
                ],
            },
            headers=headers,
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "disk I/O error"

        assert client.get("/api/performances", headers=headers).json() == []
        assert client.get("/api/employments", headers=headers).json() == []


def test_performance_crud_and_year_filter(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        hamlet = _create_performance(client, headers)
        lear = _create_performance(client, headers, name="King Lear", year=2004, budget=12000)

        loaded = client.get(f"/api/performances/{hamlet['id']}", headers=headers)
        assert loaded.status_code == 200
        assert "cast" not in loaded.json()

        updated = client.put(f"/api/performances/{hamlet['id']}", json={"budget": 6500}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["budget"] == 6500
        assert updated.json()["year"] == 1990

        by_year = client.get("/api/performances/year/2004", headers=headers)
        assert by_year.status_code == 200
        assert [item["id"] for item in by_year.json()] == [lear["id"]]
        assert client.get("/api/performances/year/1812", headers=headers).json() == []

        listed = client.get("/api/performances", headers=headers)
        assert {item["id"] for item in listed.json()} == {hamlet["id"], lear["id"]}
        assert all(item["cast"] == [] for item in listed.json())


def test_cast_lookup_returns_every_matching_employment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        first = _create_actor(client, headers, name="First", rank="Lead")
        second = _create_actor(client, headers, name="Second")
        other = _create_performance(client, headers, name="Other")
        _create_employment(client, headers, second["id"], other["id"], role="Elsewhere")

        performance = _create_performance(
            client,
            headers,
            cast=[{"actor": first["id"], "role": "Hamlet", "annualContractValue": 1000}],
        )
        late = _create_employment(client, headers, second["id"], performance["id"], role="Horatio")

        cast = client.get(f"/api/performances/{performance['id']}/cast", headers=headers)
        assert cast.status_code == 200
        members = {member["id"]: member for member in cast.json()}
        assert set(members) == {performance["cast"][0]["id"], late["id"]}
        assert members[late["id"]]["actor"] == {"id": second["id"], "name": "Second", "rank": None}
        assert members[late["id"]]["annualContractValue"] == 1200
        assert set(members[late["id"]]) == {"id", "actor", "role", "annualContractValue"}

        listed = client.get("/api/performances", headers=headers).json()
        listed_cast = next(item["cast"] for item in listed if item["id"] == performance["id"])
        assert {member["actor"]["name"] for member in listed_cast} == {"First", "Second"}


def test_employment_crud_expands_references(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers, name="Natalia Uzhviy")
        performance = _create_performance(client, headers, name="Forest Song", year=1958, budget=3000)

        created = _create_employment(client, headers, actor["id"], performance["id"], role="Mavka")
        assert created["actor"] == actor["id"]
        assert created["performance"] == performance["id"]

        listed = client.get("/api/employments", headers=headers)
        assert listed.status_code == 200
        item = listed.json()[0]
        assert item["actor"]["name"] == "Natalia Uzhviy"
        assert item["performance"] == {"id": performance["id"], "name": "Forest Song", "year": 1958}

        by_actor = client.get(f"/api/employments/actor/{actor['id']}", headers=headers)
        assert by_actor.json()[0]["performance"]["name"] == "Forest Song"
        assert by_actor.json()[0]["actor"] == actor["id"]

        updated = client.put(
            f"/api/employments/{created['id']}",
            json={"role": "Mavka (revival)", "annualContractValue": 2500},
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["role"] == "Mavka (revival)"
        assert updated.json()["annualContractValue"] == 2500
        assert updated.json()["actor"]["id"] == actor["id"]

        loaded = client.get(f"/api/employments/{created['id']}", headers=headers)
        assert loaded.json()["role"] == "Mavka (revival)"

        deleted = client.delete(f"/api/employments/{created['id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Employment deleted successfully"}
        assert client.get(f"/api/employments/{created['id']}", headers=headers).status_code == 404


def test_employment_requires_well_formed_references(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        performance = _create_performance(client, headers)

        malformed = client.post(
            "/api/employments",
            json={"actor": "123", "performance": performance["id"], "role": "Ghost", "annualContractValue": 1},
            headers=headers,
        )
        assert malformed.status_code == 400

        missing_value = client.post(
            "/api/employments",
            json={"actor": str(uuid4()), "performance": performance["id"], "role": "Ghost"},
            headers=headers,
        )
        assert missing_value.status_code == 400

        # Existence is not checked: the reference stays a bare id when read back.
        dangling_actor = str(uuid4())
        dangling = _create_employment(client, headers, dangling_actor, performance["id"])
        loaded = client.get(f"/api/employments/{dangling['id']}", headers=headers)
        assert loaded.json()["actor"] == dangling_actor
        assert loaded.json()["performance"]["id"] == performance["id"]


def test_non_finite_amounts_are_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        json_headers = {**headers, "Content-Type": "application/json"}
        actor = _create_actor(client, headers)
        performance = _create_performance(client, headers)

        # Python's json module reads 1e999 as infinity.
        bad_budget = client.post(
            "/api/performances",
            content='{"name": "Endless", "year": 2000, "budget": 1e999}',
            headers=json_headers,
        )
        assert bad_budget.status_code == 400
        assert "budget" in bad_budget.json()["detail"][0]["loc"]

        bad_value = client.post(
            "/api/employments",
            content=(
                f'{{"actor": "{actor["id"]}", "performance": "{performance["id"]}", '
                '"role": "Ghost", "annualContractValue": 1e999}'
            ),
            headers=json_headers,
        )
        assert bad_value.status_code == 400

        bad_cast = client.post(
            "/api/performances",
            content=(
                '{"name": "Endless", "year": 2000, "budget": 10, '
                f'"cast": [{{"actor": "{actor["id"]}", "role": "Ghost", "annualContractValue": NaN}}]}}'
            ),
            headers=json_headers,
        )
        assert bad_cast.status_code == 400

        bad_update = client.put(
            f"/api/performances/{performance['id']}",
            content='{"budget": Infinity}',
            headers=json_headers,
        )
        assert bad_update.status_code == 400

        assert len(client.get("/api/performances", headers=headers).json()) == 1
        assert client.get("/api/employments", headers=headers).json() == []


def test_update_rejects_null_for_required_fields(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)
        performance = _create_performance(client, headers)
        employment = _create_employment(client, headers, actor["id"], performance["id"])

        for body in ({"name": None}, {"year": None}, {"budget": None}):
            response = client.put(f"/api/performances/{performance['id']}", json=body, headers=headers)
            assert response.status_code == 400

        for body in ({"role": None}, {"annualContractValue": None}, {"actor": None}, {"performance": None}):
            response = client.put(f"/api/employments/{employment['id']}", json=body, headers=headers)
            assert response.status_code == 400

        loaded = client.get(f"/api/employments/{employment['id']}", headers=headers).json()
        assert loaded["role"] == "Ghost"
        assert loaded["annualContractValue"] == 1200
        assert client.get(f"/api/performances/{performance['id']}", headers=headers).json()["budget"] == 5000


def test_delete_actor_cascades_to_employments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers, name="A1")
        colleague = _create_actor(client, headers, name="A2")
        hamlet = _create_performance(client, headers)
        lear = _create_performance(client, headers, name="King Lear")
        _create_employment(client, headers, actor["id"], hamlet["id"], role="Hamlet")
        _create_employment(client, headers, actor["id"], lear["id"], role="Edgar")
        kept = _create_employment(client, headers, colleague["id"], hamlet["id"], role="Laertes")

        deleted = client.delete(f"/api/actors/{actor['id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Actor and associated employments deleted successfully"}

        assert client.get(f"/api/actors/{actor['id']}", headers=headers).status_code == 404
        assert client.get(f"/api/employments/actor/{actor['id']}", headers=headers).json() == []
        assert [item["id"] for item in client.get("/api/employments", headers=headers).json()] == [kept["id"]]
        assert client.get(f"/api/performances/{lear['id']}", headers=headers).status_code == 200


def test_delete_performance_cascades_to_employments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)
        performance = _create_performance(
            client,
            headers,
            cast=[{"actor": actor["id"], "role": "Hamlet", "annualContractValue": 1000}],
        )

        deleted = client.delete(f"/api/performances/{performance['id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Performance deleted successfully"}

        assert client.get(f"/api/performances/{performance['id']}", headers=headers).status_code == 404
        assert client.get(f"/api/performances/{performance['id']}/cast", headers=headers).json() == []
        assert client.get(f"/api/employments/actor/{actor['id']}", headers=headers).json() == []
        assert client.get(f"/api/actors/{actor['id']}", headers=headers).status_code == 200


@pytest.mark.parametrize("collection", ["actors", "performances", "employments"])
def test_deleting_unknown_record_is_side_effect_free(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, collection: str
) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        actor = _create_actor(client, headers)
        performance = _create_performance(client, headers)
        _create_employment(client, headers, actor["id"], performance["id"])

        collections = ("actors", "performances", "employments")
        before = {name: client.get(f"/api/{name}", headers=headers).json() for name in collections}

        response = client.delete(f"/api/{collection}/{uuid4()}", headers=headers)
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

        after = {name: client.get(f"/api/{name}", headers=headers).json() for name in collections}
        assert after == before


def test_users_listing_omits_password_hashes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with _client(tmp_path, monkeypatch) as client:
        headers = _register(client)
        _register(client, email="b@x.com")

        response = client.get("/users", headers=headers)
        assert response.status_code == 200
        users = response.json()
        assert {user["email"] for user in users} == {"a@x.com", "b@x.com"}
        assert all("password" not in key for user in users for key in user)
