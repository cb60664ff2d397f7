"""
Tests for the admin status view and transaction history.
"""

from fastapi.testclient import TestClient

from scrooge_bank.main import app


class TestAdminStatus:

    def test_non_admin_returns_403(self, client, alice):
        _, headers = alice
        response = client.get("/admin/status", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    def test_admin_sees_numbers(self, client, admin_headers):
        response = client.get("/admin/status", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "bankOnHand": 250000,
            "totalLoans": 0,
            "totalDeposits": 0,
        }

    def test_status_reflects_deposits_and_loans(self, client, alice, admin_headers):
        _, headers = alice
        account = client.post("/accounts", json={"type": "checking"}, headers=headers).json()
        client.post(f"/accounts/{account['id']}/deposits", json={"amount": 1003}, headers=headers)
        client.post("/loans", json={"amount": 5000}, headers=headers)

        data = client.get("/admin/status", headers=admin_headers).json()
        assert data["totalDeposits"] == 1003
        assert data["bankOnHand"] == 250250
        assert data["totalLoans"] == 5000


class TestTransactions:

    def test_history_covers_accounts_and_loans(self, client, alice):
        _, headers = alice
        account = client.post("/accounts", json={"type": "checking"}, headers=headers).json()
        client.post(f"/accounts/{account['id']}/deposits", json={"amount": 500}, headers=headers)
        loan = client.post("/loans", json={"amount": 1000}, headers=headers).json()
        client.post(f"/loans/{loan['id']}/payments", json={"amount": 100}, headers=headers)

        response = client.get("/transactions", headers=headers)
        assert response.status_code == 200
        txs = response.json()
        assert [t["type"] for t in txs] == ["deposit", "loan_disbursement", "loan_payment"]
        assert txs[0]["account_id"] == account["id"]
        assert txs[0]["loan_id"] is None
        assert txs[1]["loan_id"] == loan["id"]
        assert txs[1]["account_id"] is None
        assert txs[1]["balance_after"] is None

    def test_history_excludes_other_users(self, client, alice, bob):
        _, alice_headers = alice
        _, bob_headers = bob
        client.post("/loans", json={"amount": 1000}, headers=alice_headers)

        assert client.get("/transactions", headers=bob_headers).json() == []


class TestUnhandledErrors:

    def test_unexpected_error_returns_500_with_message(self, client, alice, monkeypatch):
        _, headers = alice

        def explode(self, user_id):
            raise RuntimeError("ledger offline")

        monkeypatch.setattr(
            "scrooge_bank.services.ledger_store.LedgerStore.list_transactions_for_user",
            explode,
        )
        quiet_client = TestClient(app, raise_server_exceptions=False)
        response = quiet_client.get("/transactions", headers=headers)

        assert response.status_code == 500
        assert response.json() == {"error": "ledger offline"}
