"""
SearchLicensesHandler.
"""

from licenses.application.dto.license_dto import LicenseSearchResultDTO
from licenses.application.queries.search_licenses import SearchLicensesQuery
from licenses.ports.license_ledger import LicenseLedger


class SearchLicensesHandler:
    """Handler for SearchLicensesQuery."""

    def __init__(self, ledger: LicenseLedger):
        self.ledger = ledger

    async def handle(self, query: SearchLicensesQuery) -> LicenseSearchResultDTO:
        """
        Return the first matching license with its recent history.

        An empty term matches nothing.
        """
        term = query.term.strip()
        if not term:
            return LicenseSearchResultDTO(license=None)

        matches = await self.ledger.search(term)
        if not matches:
            return LicenseSearchResultDTO(license=None)

        license = matches[0]
        history = await self.ledger.recent_history(license.key, limit=query.history_limit)
        return LicenseSearchResultDTO(license=license, history=history, match_count=len(matches))
