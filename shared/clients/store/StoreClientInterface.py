from abc import abstractmethod

import httpx

from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface


class StoreError(Exception):
    """Raised when the table store answers with a non-success response."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None, details: str | None = None, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint


class StoreClientInterface(ClientInterface):
    """Row-based access to a hosted relational table store."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "store"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_table(self, table: str) -> str:
        """
        Returns the endpoint path for row requests against a table.

        Args:
            table (str): The table name, e.g. "dak_documents".

        Returns:
            str: The endpoint path (e.g. "/rest/v1/dak_documents")
        """
        pass

    ################ QUERY BUILDING ##################
    @abstractmethod
    def _build_select_params(self, columns: str, filters: dict | None, order: list[tuple[str, bool]] | None, limit: int | None) -> list[tuple[str, str]]:
        """
        Translates a select into the store's query parameters.

        Args:
            columns (str): Column list, may embed joined tables, e.g. "*,departments(name,code)".
            filters (dict | None): Equality filters, column -> value.
            order (list[tuple[str, bool]] | None): (column, ascending) pairs, applied in order.
            limit (int | None): Maximum number of rows.

        Returns:
            list[tuple[str, str]]: Query parameters.
        """
        pass

    @abstractmethod
    def _build_match_params(self, match: dict) -> list[tuple[str, str]]:
        """
        Translates equality conditions selecting the rows of an update into query parameters.
        """
        pass

    @abstractmethod
    def _get_write_headers(self) -> dict:
        """
        Returns the extra headers that make insert and update requests answer with the stored rows.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_select(
        self,
        table: str,
        columns: str = "*",
        filters: dict | None = None,
        order: list[tuple[str, bool]] | None = None,
        limit: int | None = None,
        access_token: str | None = None,
    ) -> list[dict]:
        """
        Reads rows from a table.

        Returns:
            list[dict]: The matching rows in store order.
        Raises:
            StoreError: If the store answers with a non-success status.
        """
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_table(table),
            params=self._build_select_params(columns, filters, order, limit),
            access_token=access_token,
        )
        rows = self._parse_rows(resp)
        self.logging.debug("Selected %d rows from %s on %s", len(rows), table, self._get_engine_name())
        return rows

    async def do_insert(self, table: str, row: dict, access_token: str | None = None) -> dict:
        """
        Inserts one row and returns it as stored, including server-assigned columns.

        Raises:
            StoreError: If the store rejects the row or returns nothing.
        """
        resp = await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_table(table),
            json=row,
            access_token=access_token,
            additional_headers=self._get_write_headers(),
        )
        rows = self._parse_rows(resp)
        if not rows:
            raise StoreError(f"Insert into {table} returned no row.", status_code=resp.status_code)
        return rows[0]

    async def do_update(self, table: str, match: dict, patch: dict, access_token: str | None = None) -> list[dict]:
        """
        Applies a partial patch to every row matching the equality conditions.

        Returns:
            list[dict]: The patched rows. Empty if nothing matched.
        Raises:
            StoreError: If the store rejects the patch.
        """
        resp = await self.do_request(
            method="PATCH",
            endpoint=self._get_endpoint_table(table),
            params=self._build_match_params(match),
            json=patch,
            access_token=access_token,
            additional_headers=self._get_write_headers(),
        )
        return self._parse_rows(resp)

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_rows(self, response: httpx.Response) -> list[dict]:
        """
        Returns the rows of a successful response, or raises the parsed store error.

        Raises:
            StoreError: If the status is not 2xx or the body is not a row list.
        """
        if response.status_code >= 300:
            raise self._parse_error(response)
        if not response.content:
            return []
        body = response.json()
        if isinstance(body, dict):
            return [body]
        if not isinstance(body, list):
            raise StoreError(f"Unexpected response body from {self._get_engine_name()}: {body!r}", status_code=response.status_code)
        return body

    @abstractmethod
    def _parse_error(self, response: httpx.Response) -> StoreError:
        """
        Converts a non-success response into a StoreError with a human-readable message.
        """
        pass
