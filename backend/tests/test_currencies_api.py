"""Currency list and exchange rate lookup."""


async def test_list_currencies(client, alice):
    _, headers = alice
    response = await client.get("/currencies", headers=headers)
    assert response.status_code == 200
    codes = [c["code"] for c in response.json()]
    assert codes == sorted(codes)
    assert "THB" in codes
    usd = next(c for c in response.json() if c["code"] == "USD")
    assert usd["symbol"] == "$"


async def test_currencies_require_auth(client):
    assert (await client.get("/currencies")).status_code == 401


async def test_rate_from_bot(client, alice, rate_client):
    _, headers = alice
    rate_client.rates[("USD", "2025-01-14")] = "34.2345000"
    response = await client.get("/rates/usd/2025-01-14", headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "currency_id": "USD",
        "period": "2025-01-14",
        "buying_transfer": "34.2345000",
        "source": "BOT",
    }


async def test_thb_rate_is_system(client, alice, rate_client):
    _, headers = alice
    response = await client.get("/rates/THB/2025-01-14", headers=headers)
    assert response.status_code == 200
    assert response.json()["buying_transfer"] == "1.000000"
    assert response.json()["source"] == "SYSTEM"
    assert rate_client.calls == []


async def test_unavailable_rate_suggests_manual_entry(client, alice):
    _, headers = alice
    response = await client.get("/rates/EUR/2025-01-11", headers=headers)
    assert response.status_code == 404
    body = response.json()
    assert body["data"] is None
    assert "manually" in body["error"]


async def test_rate_validates_date(client, alice):
    _, headers = alice
    for bad in ("2025-1-14", "14-01-2025", "2025-02-30", "20250114xx"):
        response = await client.get(f"/rates/USD/{bad}", headers=headers)
        assert response.status_code == 400, bad
        assert "YYYY-MM-DD" in response.json()["error"]


async def test_rate_validates_currency(client, alice, rate_client):
    _, headers = alice
    response = await client.get("/rates/XYZ/2025-01-14", headers=headers)
    assert response.status_code == 400
    assert "Supported" in response.json()["error"]
    assert rate_client.calls == []
