from abc import abstractmethod

import httpx

from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.models.auth import AuthResult, AuthSession, AuthUser


class AuthClientInterface(ClientInterface):
    """Email/password sign-in against a hosted identity provider."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "auth"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_sign_in(self) -> str:
        """
        Returns the endpoint path for password sign-in (e.g. "/auth/v1/token?grant_type=password").
        """
        pass

    @abstractmethod
    def _get_endpoint_user(self) -> str:
        """
        Returns the endpoint path that resolves an access token to its user.
        """
        pass

    @abstractmethod
    def _get_endpoint_sign_out(self) -> str:
        """
        Returns the endpoint path that revokes a session.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_sign_in(self, email: str, password: str) -> AuthResult:
        """
        Signs a user in with email and password.

        Returns:
            AuthResult: The session on success, otherwise the provider's message verbatim.
        """
        try:
            resp = await self.do_request(
                method="POST",
                endpoint=self._get_endpoint_sign_in(),
                json={"email": email, "password": password},
            )
        except httpx.HTTPError as e:
            self.logging.error("Sign-in request to %s failed: %s", self._get_engine_name(), e)
            return AuthResult(error=str(e) or e.__class__.__name__)

        if resp.status_code >= 300:
            message = self._parse_error_message(resp)
            self.logging.warning("Sign-in rejected for %s: %s", email, message)
            return AuthResult(error=message)

        session = self._parse_session(resp.json())
        self.logging.info("User %s signed in", session.user.email or session.user.id)
        return AuthResult(session=session)

    async def do_get_user(self, access_token: str) -> AuthUser | None:
        """
        Resolves an access token to the user it belongs to.

        Returns:
            AuthUser | None: The user, or None if the token is invalid or expired.
        Raises:
            Exception: If the provider fails for any other reason.
        """
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_user(), access_token=access_token)
        if resp.status_code in (401, 403):
            return None
        if resp.status_code >= 300:
            raise Exception(f"Resolving user on {self._get_engine_name()} failed with status {resp.status_code}: {self._parse_error_message(resp)}")
        return self._parse_user(resp.json())

    async def do_sign_out(self, access_token: str) -> None:
        """
        Revokes the session of the given token. An already invalid token counts as signed out.
        """
        resp = await self.do_request(method="POST", endpoint=self._get_endpoint_sign_out(), access_token=access_token)
        if resp.status_code >= 300 and resp.status_code not in (401, 403):
            raise Exception(f"Sign-out on {self._get_engine_name()} failed with status {resp.status_code}: {self._parse_error_message(resp)}")

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_session(self, response: dict) -> AuthSession:
        """
        Parses a successful sign-in response into an AuthSession.
        """
        pass

    @abstractmethod
    def _parse_user(self, response: dict) -> AuthUser:
        """
        Parses a user response into an AuthUser.
        """
        pass

    @abstractmethod
    def _parse_error_message(self, response: httpx.Response) -> str:
        """
        Extracts the provider's human-readable failure message from a non-success response.
        """
        pass
