"""
End-to-end walkthroughs of a customer's life at the bank.
"""


def test_register_open_deposit_withdraw_borrow_repay(client):
    reg = client.post("/auth/register", json={
        "name": "Alice",
        "email": "alice@example.com",
        "password": "password",
    })
    assert reg.status_code == 201
    headers = {"Authorization": f"Bearer {reg.json()['token']}"}

    login = client.post("/auth/login", json={
        "email": "alice@example.com",
        "password": "password",
    })
    assert login.status_code == 200

    opened = client.post("/accounts", json={"type": "checking"}, headers=headers)
    assert opened.status_code == 201
    account = opened.json()

    dep = client.post(
        f"/accounts/{account['id']}/deposits", json={"amount": 1000}, headers=headers
    )
    assert dep.status_code == 200
    assert dep.json()["account"]["balance"] == 1000

    wit = client.post(
        f"/accounts/{account['id']}/withdrawals", json={"amount": 200}, headers=headers
    )
    assert wit.status_code == 200
    assert wit.json()["account"]["balance"] == 800

    loan = client.post("/loans", json={"amount": 50000}, headers=headers)
    assert loan.status_code == 201

    payment = client.post(
        f"/loans/{loan.json()['id']}/payments", json={"amount": 10000}, headers=headers
    )
    assert payment.status_code == 200
    assert payment.json()["outstanding"] == 40000

    over = client.post(
        f"/accounts/{account['id']}/withdrawals", json={"amount": 999999}, headers=headers
    )
    assert over.status_code == 400
    assert client.get(f"/accounts/{account['id']}", headers=headers).json()["balance"] == 800

    txs = client.get("/transactions", headers=headers).json()
    assert [t["type"] for t in txs] == [
        "deposit", "withdrawal", "loan_disbursement", "loan_payment",
    ]


def test_every_balance_change_has_one_ledger_row(client, alice, admin_headers):
    _, headers = alice
    account = client.post("/accounts", json={"type": "checking"}, headers=headers).json()
    path = f"/accounts/{account['id']}"

    for amount in [300, 200, 50]:
        client.post(f"{path}/deposits", json={"amount": amount}, headers=headers)
    client.post(f"{path}/withdrawals", json={"amount": 100}, headers=headers)
    client.post(f"{path}/withdrawals", json={"amount": 10_000}, headers=headers)

    txs = client.get("/transactions", headers=headers).json()
    assert len(txs) == 4
    assert txs[-1]["balance_after"] == 450
    assert client.get("/admin/status", headers=admin_headers).json()["totalDeposits"] == 450
