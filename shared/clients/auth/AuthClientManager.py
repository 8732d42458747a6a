from shared.helper.HelperConfig import HelperConfig
from shared.clients.auth.AuthClientInterface import AuthClientInterface


class AuthClientManager:
    """
    Manager class to instantiate the auth client named in the configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        engine = self.helper_config.get_string_val("AUTH_ENGINE", default="supabase")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> AuthClientInterface:
        """
        Instantiates the auth client for the configured engine.

        Raises:
            ValueError: If the engine has no client implementation.
        """
        engine = self._get_engine_from_env()
        className = f"AuthClient{engine}"
        try:
            module = __import__(
                f"shared.clients.auth.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported auth engine specified: '{engine}'. Error: {e}")
        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated auth client for engine: %s", engine)
        return client

    def get_client(self) -> AuthClientInterface:
        return self.client
