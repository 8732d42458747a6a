import httpx

from shared.clients.auth.AuthClientInterface import AuthClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.auth import AuthSession, AuthUser
from shared.models.config import EnvConfig


class AuthClientSupabase(AuthClientInterface):
    """Talks to the GoTrue endpoint of a Supabase project."""

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
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/auth/v1/health"

    def _get_endpoint_sign_in(self) -> str:
        return "/auth/v1/token?grant_type=password"

    def _get_endpoint_user(self) -> str:
        return "/auth/v1/user"

    def _get_endpoint_sign_out(self) -> str:
        return "/auth/v1/logout"

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_session(self, response: dict) -> AuthSession:
        return AuthSession(
            access_token=response["access_token"],
            token_type=response.get("token_type", "bearer"),
            expires_in=response.get("expires_in"),
            refresh_token=response.get("refresh_token"),
            user=self._parse_user(response["user"]),
        )

    def _parse_user(self, response: dict) -> AuthUser:
        return AuthUser(id=str(response["id"]), email=response.get("email"), role=response.get("role"))

    def _parse_error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            # GoTrue has answered with each of these keys across versions
            for key in ("error_description", "msg", "message", "error"):
                if body.get(key):
                    return str(body[key])
        return response.text.strip() or f"Request failed with status {response.status_code}"
