"""HTTP surface through FastAPI's TestClient."""

from fastapi.testclient import TestClient

from stockchart.main import app

client = TestClient(app)


def _bars(closes):
    return [
        {
            "time": f"2024-01-{i + 1:02d}",
            "open": close,
            "high": close + 1,
            "low": close - 1,
            "close": close,
            "volume": 100,
        }
        for i, close in enumerate(closes)
    ]


def test_health_endpoint() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_catalog() -> None:
    response = client.get("/api/v1/indicators/catalog")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 9
    assert body[0] == {
        "id": "sma_20",
        "name": "SMA (20)",
        "short_name": "SMA20",
        "color": "#f59e0b",
        "placement": "overlay",
        "default_enabled": False,
    }


def test_catalog_filtered_by_placement() -> None:
    response = client.get("/api/v1/indicators/catalog", params={"placement": "separate"})

    assert [entry["id"] for entry in response.json()] == ["rsi", "macd"]


def test_chart_data_absent_slots_are_null() -> None:
    closes = [10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20]
    response = client.post(
        "/api/v1/indicators/chart-data",
        json={"symbol": "INFY", "bars": _bars(closes), "indicators": ["sma_20", "rsi"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["symbol"] == "INFY"
    assert body["empty"] is False
    assert len(body["bars"]) == 11
    assert body["series"]["sma_20"]["lines"]["value"] == [None] * 11
    assert body["series"]["rsi"]["guides"] == {"overbought": 70.0, "oversold": 30.0}


def test_chart_data_empty_history() -> None:
    response = client.post("/api/v1/indicators/chart-data", json={"bars": []})

    assert response.status_code == 200
    body = response.json()
    assert body["empty"] is True
    assert body["message"] == "No chart data available"
    assert body["series"]["vwap"]["lines"] == {"value": []}


def test_chart_data_unknown_indicator_is_422() -> None:
    response = client.post(
        "/api/v1/indicators/chart-data",
        json={"bars": _bars([5.0, 6.0]), "indicators": ["stochastic"]},
    )

    assert response.status_code == 422


def test_levels_endpoint() -> None:
    closes = [10, 9, 8, 9, 10, 11, 12, 11, 10, 9, 10]
    response = client.post("/api/v1/indicators/levels", json={"bars": _bars(closes), "lookback": 2})

    assert response.status_code == 200
    assert response.json()["levels"] == [
        {"price": 12.0, "kind": "resistance", "strength": 1},
        {"price": 8.0, "kind": "support", "strength": 1},
    ]


def test_invalid_parameter_is_400() -> None:
    response = client.post(
        "/api/v1/indicators/levels",
        json={"bars": _bars([5.0] * 20), "cluster_threshold": 0},
    )

    assert response.status_code == 400
    assert "threshold" in response.json()["detail"]


def test_malformed_bars_are_dropped_not_rejected() -> None:
    good = _bars([10.0, 11.0, 12.0])
    bad_price = {**_bars([13.0])[0], "time": "2024-01-04", "open": "abc"}
    bad_time = {**_bars([14.0])[0], "time": "garbage"}
    response = client.post(
        "/api/v1/indicators/chart-data",
        json={"bars": good + [bad_price, bad_time], "indicators": ["vwap"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["empty"] is False
    assert [bar["close"] for bar in body["bars"]] == [10.0, 11.0, 12.0]
    assert len(body["series"]["vwap"]["lines"]["value"]) == 3


def test_levels_endpoint_skips_malformed_bars() -> None:
    closes = [10, 9, 8, 9, 10, 11, 12, 11, 10, 9, 10]
    bars = _bars(closes) + [{"time": "2024-02-01", "close": "n/a"}]
    response = client.post("/api/v1/indicators/levels", json={"bars": bars, "lookback": 2})

    assert response.status_code == 200
    assert [level["price"] for level in response.json()["levels"]] == [12.0, 8.0]
