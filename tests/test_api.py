import datetime

import pytest

from dcplanner.api import create_app
from dcplanner.config import AppConfig
from dcplanner.data_model import default_payload

THIS_YEAR = datetime.date.today().year


@pytest.fixture
def client(tmp_path):
    app = create_app(AppConfig(data_dir=str(tmp_path)))
    app.config["TESTING"] = True
    return app.test_client()


def test_healthcheck(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_schema_lists_profile_fields_and_scenario_columns(client):
    body = client.get("/api/schema").get_json()

    fields = [f["field"] for f in body["profile"]]
    assert "familySize" in fields and "workStartDate" in fields
    assert len(body["scenarios"]["defaults"]) == 4
    assert body["policy"]["drawdownReturnRate"] == 2.0
    assert all(set(f) == {"field", "label", "kind", "default", "options", "min", "max", "step", "help"} for f in body["profile"])


def test_calculate_returns_projection_and_summary(client):
    payload = default_payload(THIS_YEAR)

    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 200
    body = response.get_json()
    assert len(body["projections"]) == 1990 + 100 - THIS_YEAR + 1
    assert body["projections"][0]["year"] == THIS_YEAR
    assert "scenario4Value" in body["projections"][0]
    assert body["summary"]["bestOptionId"] in {1, 2, 3, 4}
    for scenario in body["summary"]["scenarios"]:
        assert scenario["depletionAge"] == "never" or isinstance(scenario["depletionAge"], int)


def test_calculate_with_step_samples_rows(client):
    response = client.post("/api/calculate?step=10", json=default_payload(THIS_YEAR))

    rows = response.get_json()["projections"]
    years = [row["year"] for row in rows]
    assert years[0] == THIS_YEAR
    assert years[-1] == 1990 + 100
    assert all(b - a <= 10 for a, b in zip(years, years[1:]))


def test_calculate_rejects_invalid_input_with_field(client):
    payload = default_payload(THIS_YEAR)
    payload["familySize"] = 6

    response = client.post("/api/calculate", json=payload)

    assert response.status_code == 400
    assert response.get_json()["field"] == "familySize"


def test_calculate_rejects_non_object_body(client):
    response = client.post("/api/calculate", json=[1, 2])

    assert response.status_code == 400


def test_settings_save_load_delete(client):
    saved = client.post("/api/settings/mine", json={"birthYear": 1985})
    assert saved.get_json()["settings"] == ["mine"]

    loaded = client.get("/api/settings/mine").get_json()
    assert loaded["birthYear"] == 1985
    assert loaded["familySize"] == 3

    client.delete("/api/settings/mine")
    assert client.get("/api/settings/mine").status_code == 404


def test_share_round_trip(client):
    payload = default_payload(THIS_YEAR)
    payload["nickname"] = "공유"

    token = client.post("/api/share", json=payload).get_json()["token"]
    opened = client.get(f"/api/share/{token}").get_json()

    assert opened == payload
