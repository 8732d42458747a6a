import httpx

from shared.clients.store.StoreClientInterface import StoreClientInterface, StoreError
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class StoreClientSupabase(StoreClientInterface):
    """Talks to the PostgREST endpoint of a Supabase project."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Supabase"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self, access_token: str | None = None) -> dict:
        # row-level security sees the user's token, the anon key only identifies the project
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/rest/v1/"

    def _get_endpoint_table(self, table: str) -> str:
        return f"/rest/v1/{table}"

    ################ QUERY BUILDING ##################
    def _build_select_params(self, columns: str, filters: dict | None, order: list[tuple[str, bool]] | None, limit: int | None) -> list[tuple[str, str]]:
        params = [("select", "".join(columns.split()))]
        params.extend(self._build_match_params(filters or {}))
        if order:
            params.append(("order", ",".join(f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in order)))
        if limit is not None:
            params.append(("limit", str(limit)))
        return params

    def _build_match_params(self, match: dict) -> list[tuple[str, str]]:
        return [(column, f"eq.{self._format_filter_value(value)}") for column, value in match.items()]

    def _format_filter_value(self, value) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        return str(value)

    def _get_write_headers(self) -> dict:
        return {"Prefer": "return=representation"}

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_error(self, response: httpx.Response) -> StoreError:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("msg") or body.get("error_description") or body.get("error")
            if message:
                return StoreError(
                    message=str(message),
                    status_code=response.status_code,
                    code=body.get("code"),
                    details=body.get("details"),
                    hint=body.get("hint"),
                )
        text = response.text.strip()
        return StoreError(
            message=text or f"Request failed with status {response.status_code}",
            status_code=response.status_code,
        )
