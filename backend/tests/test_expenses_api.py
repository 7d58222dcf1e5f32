from __future__ import annotations


def test_list_expenses_returns_demo_rows(client):
    resp = client.get("/api/expenses")

    assert resp.status_code == 200
    rows = resp.get_json()
    assert len(rows) == 5
    assert rows[0] == {"id": "1", "category": "家賃", "amount": 55000, "date": "2023-10-01"}


def test_added_expense_is_listed_first_and_counted(client):
    resp = client.post(
        "/api/expenses",
        json={"category": "交通費", "amount": 7000, "date": "2023-10-25"},
    )

    assert resp.status_code == 201
    created = resp.get_json()
    assert created["category"] == "交通費"
    assert created["amount"] == 7000
    assert len(created["id"]) == 9

    rows = client.get("/api/expenses").get_json()
    assert rows[0]["id"] == created["id"]

    overview = client.get("/api/overview").get_json()
    assert overview["totalExpenses"] == 120000
    assert {"name": "交通費", "value": 7000} in overview["expensesByCategory"]


def test_expense_date_defaults_to_today(client):
    resp = client.post("/api/expenses", json={"category": "食費", "amount": 1200})

    assert resp.status_code == 201
    assert resp.get_json()["date"]


def test_expense_requires_positive_amount(client):
    resp = client.post("/api/expenses", json={"category": "食費", "amount": 0})

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["amount"]


def test_expense_rejects_unknown_category(client):
    resp = client.post("/api/expenses", json={"category": "旅行", "amount": 1000})

    assert resp.status_code == 422


def test_hustles_include_monthly_side_income(client):
    body = client.get("/api/hustles").get_json()

    assert len(body["hustles"]) == 2
    assert body["totalSideIncome"] == 3500 * 5 * 4 + 5000 * 10 * 4


def test_profile_sums_assets(client):
    body = client.get("/api/profile").get_json()

    assert body == {
        "currentAssets": 3000000,
        "targetAssets": 30000000,
        "monthlySavingsTarget": 40000,
        "monthlyIncome": 160000,
    }
