"""Department access layer — active departments for selection lists."""

from shared.clients.store.StoreClientInterface import StoreClientInterface, StoreError
from shared.helper.HelperConfig import HelperConfig
from shared.models.auth import AuthSession
from shared.models.department import Department
from shared.models.result import ErrorKind, OperationResult

DEPARTMENTS_TABLE = "departments"


class DepartmentService:
    """Read-only access to the departments table."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        session: AuthSession | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._session = session

        self.departments: list[Department] = []
        self.loading: bool = True
        self.error: str | None = None

    async def start(self) -> OperationResult[list[Department]]:
        return await self.fetch()

    async def fetch(self) -> OperationResult[list[Department]]:
        """Load all active departments ordered by name. The previous list survives a failure."""
        self.loading = True
        try:
            rows = await self._store.do_select(
                DEPARTMENTS_TABLE,
                filters={"is_active": True},
                order=[("name", True)],
                access_token=self._session.access_token if self._session else None,
            )
            departments = [Department.model_validate(row) for row in rows]
        except StoreError as e:
            self.logging.error("Fetching departments failed: %s", e.message)
            self.error = e.message
            return OperationResult.failure(ErrorKind.STORE, e.message)
        except Exception as e:
            self.logging.exception("Fetching departments failed unexpectedly")
            self.error = str(e)
            return OperationResult.failure(ErrorKind.UNEXPECTED, str(e))
        finally:
            self.loading = False

        self.departments = departments
        self.error = None
        self.logging.debug("Fetched %d active departments", len(departments))
        return OperationResult.success(departments)
