"""Scrooge Bank: accounts, loans and a transaction ledger behind a token-gated API."""
