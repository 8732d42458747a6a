from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Describes one environment setting a client needs before it can boot.

    Attributes:
        env_key (str): Raw key, prefixed by the client with "{TYPE}_{ENGINE}_", e.g. "BASE_URL" -> "STORE_SUPABASE_BASE_URL".
        val_type (str): Expected value type: "string", "number", "bool" or "list".
        default (str | int | bool | list | None): Fallback value. None marks the setting as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | bool | list | None = None
