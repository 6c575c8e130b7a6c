def test_lookup_seeded_coupon(client):
    resp = client.get("/api/discount/1313")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["coupon_code"] == "1313"
    assert body["data"]["discount_percentage"] == 10.0
    assert body["data"]["is_active"] is True

def test_all_seed_coupons_present(client):
    expected = {"1212": 5, "1313": 10, "1414": 15, "1515": 20, "1616": 25, "1717": 50}
    for code, percentage in expected.items():
        resp = client.get(f"/api/discount/{code}")
        assert resp.status_code == 200
        assert resp.json()["data"]["discount_percentage"] == percentage

def test_lookup_trims_whitespace(client):
    padded = client.get("/api/discount/%201313%20")
    plain = client.get("/api/discount/1313")
    assert padded.status_code == 200
    assert padded.json() == plain.json()

def test_lookup_unknown_code(client):
    resp = client.get("/api/discount/9999")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Invalid or inactive coupon code"}

def test_lookup_inactive_code(client, gateway):
    affected = gateway.execute(
        "UPDATE discount_coupons SET is_active = :active WHERE coupon_code = :code",
        {"active": False, "code": "1717"}
    )
    assert affected == 1
    resp = client.get("/api/discount/1717")
    assert resp.status_code == 404

def test_lookup_is_case_sensitive(client, gateway):
    gateway.execute(
        "INSERT INTO discount_coupons (coupon_code, discount_percentage, is_active) VALUES (:code, :pct, :active)",
        {"code": "SAVE10", "pct": 10, "active": True}
    )
    assert client.get("/api/discount/SAVE10").status_code == 200
    assert client.get("/api/discount/save10").status_code == 404
