"""Utility modules for ledgerkit."""
