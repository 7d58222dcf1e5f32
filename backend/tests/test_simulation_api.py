from __future__ import annotations

import pytest


def simulation_payload() -> dict:
    return {
        "annualReturnPercent": 4.5,
        "monthlySavings": 40000,
        "horizonMonths": 180,
        "profile": {
            "currentAssets": 1000000,
            "targetAssets": 30000000,
            "monthlySavingsTarget": 40000,
            "monthlyIncome": 160000,
        },
    }


def test_simulation_endpoint_returns_projection(client):
    resp = client.post("/api/simulation", json=simulation_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["points"]) == 181
    assert body["points"][0] == {
        "month": 0,
        "year": 0.0,
        "totalAssets": 1000000,
        "passiveIncomeMonthly": 3333,
    }
    assert body["targetAssets"] == 30000000
    assert body["passiveIncome"]["year"] == 7
    assert body["passiveIncome"]["monthly"] == body["points"][84]["passiveIncomeMonthly"]


def test_simulation_defaults_to_dashboard_profile(client, settings):
    resp = client.post("/api/simulation", json={})

    assert resp.status_code == 200
    body = resp.get_json()
    # demo ledger holds 3,000,000 yen of assets
    assert body["points"][0]["totalAssets"] == 3000000
    assert body["annualReturnPercent"] == settings.default_annual_return
    assert body["monthlySavings"] == settings.monthly_savings_target
    assert body["horizonMonths"] == settings.simulation_horizon_months


def flat_payload(monthly_savings: float) -> dict:
    """Zero return from zero assets, so the target month is total / savings."""
    return {
        "annualReturnPercent": 0,
        "monthlySavings": monthly_savings,
        "horizonMonths": 180,
        "profile": {"currentAssets": 0, "targetAssets": 15000},
    }


def test_more_savings_reaches_target_sooner(client):
    slow_body = client.post("/api/simulation", json=flat_payload(1000)).get_json()
    fast_body = client.post("/api/simulation", json=flat_payload(3000)).get_json()

    # month 15 and month 5
    assert slow_body["yearsToTarget"] == 1.3
    assert slow_body["yearsToTargetLabel"] == "1.3"
    assert fast_body["yearsToTarget"] == 0.4
    assert fast_body["yearsToTargetLabel"] == "0.4"


def test_quarter_year_points_round_up(client):
    body = client.post("/api/simulation", json=flat_payload(1000)).get_json()

    assert body["points"][3]["year"] == 0.3
    assert body["points"][15]["year"] == 1.3


def test_unreached_target_reports_horizon_label(client):
    payload = simulation_payload()
    payload["monthlySavings"] = 0
    payload["annualReturnPercent"] = 1

    body = client.post("/api/simulation", json=payload).get_json()

    assert body["yearsToTarget"] is None
    assert body["yearsToTargetLabel"] == ">15"


def test_negative_savings_is_rejected(client):
    payload = simulation_payload()
    payload["monthlySavings"] = -1

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["monthlySavings"]


def test_non_positive_target_is_rejected(client):
    payload = simulation_payload()
    payload["profile"]["targetAssets"] = 0

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["profile", "targetAssets"]


def test_huge_return_rate_is_rejected(client):
    payload = simulation_payload()
    payload["annualReturnPercent"] = 1e308

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["annualReturnPercent"]


def test_return_rate_below_minus_100_percent_is_rejected(client):
    payload = simulation_payload()
    payload["annualReturnPercent"] = -150

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 422


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_return_rate_is_rejected(client, literal):
    body = '{"annualReturnPercent": %s}' % literal

    resp = client.post("/api/simulation", data=body, content_type="application/json")

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["annualReturnPercent"]


def test_non_finite_savings_is_rejected(client):
    body = '{"annualReturnPercent": 4.5, "monthlySavings": Infinity}'

    resp = client.post("/api/simulation", data=body, content_type="application/json")

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["monthlySavings"]


@pytest.mark.parametrize(
    "field, literal",
    [("currentAssets", "NaN"), ("currentAssets", "1e308"), ("targetAssets", "Infinity")],
)
def test_unbounded_profile_amounts_are_rejected(client, field, literal):
    profile = {"currentAssets": 1000000, "targetAssets": 30000000}
    fields = ", ".join(
        '"%s": %s' % (name, literal if name == field else value) for name, value in profile.items()
    )
    body = '{"annualReturnPercent": 4.5, "profile": {%s}}' % fields

    resp = client.post("/api/simulation", data=body, content_type="application/json")

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["profile", field]


def test_largest_accepted_inputs_stay_finite(client):
    payload = {
        "annualReturnPercent": 100,
        "monthlySavings": 1e15,
        "horizonMonths": 600,
        "profile": {"currentAssets": 1e15, "targetAssets": 1e15},
    }

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 200
    assert resp.get_json()["yearsToTarget"] == 0.0


def test_non_json_body_returns_400(client):
    resp = client.post("/api/simulation", data="not json", content_type="text/plain")

    assert resp.status_code == 400
    assert "detail" in resp.get_json()
