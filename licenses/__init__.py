"""
Licenses module - the license ledger.

This module handles:
- License entity and activation history records
- License key generation and format checks
- The LicenseLedger port and its Django ORM adapter
- Administrative issuance, revocation, search and reporting
"""
