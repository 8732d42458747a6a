"""Document access layer — fetches, registers and patches DAK documents.

One instance backs one view: it owns the fetched list plus loading and error
flags. Every mutation is followed by a full re-fetch, so the list is always the
store's newest-first order as of the last completed fetch. No operation lets an
exception escape; callers get an OperationResult instead.
"""

from datetime import datetime, timezone

from pydantic import ValidationError

from shared.clients.store.StoreClientInterface import StoreClientInterface, StoreError
from shared.helper.HelperConfig import HelperConfig
from shared.models.auth import AuthSession
from shared.models.document import DakDocument, DocumentCreate, DocumentUpdate
from shared.models.result import ErrorKind, OperationResult

DOCUMENTS_TABLE = "dak_documents"
DOCUMENT_COLUMNS = "*, departments(name, code)"
REQUIRED_CREATE_FIELDS = ("type", "department_id", "subject", "sender")
REQUIRED_FIELDS_MESSAGE = "Please fill all required fields."


class DocumentService:
    """Access layer for the dak_documents table, bound to one signed-in session."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        session: AuthSession | None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._session = session
        self._fetch_limit = int(helper_config.get_number_val("DAK_FETCH_LIMIT", default=50))

        self.documents: list[DakDocument] = []
        self.loading: bool = True
        self.error: str | None = None
        self._disposed = False

    ##########################################
    ################ LIFECYCLE ###############
    ##########################################

    async def start(self) -> OperationResult[list[DakDocument]] | None:
        """Run the initial fetch, but only once an identity is present.

        Returns:
            OperationResult | None: The fetch result, or None when there is no session.
        """
        if self._session is None:
            self.logging.debug("No session available, skipping document fetch.")
            return None
        return await self.fetch()

    def dispose(self) -> None:
        """Detach the instance from its view. Requests still in flight no longer touch its state."""
        self._disposed = True

    ##########################################
    ################ CORE ####################
    ##########################################

    async def fetch(self) -> OperationResult[list[DakDocument]]:
        """Load the most recent documents, newest first, each joined with its department.

        On failure the previous list is kept and the error flag is raised.
        """
        self._set_state(loading=True)
        try:
            rows = await self._store.do_select(
                DOCUMENTS_TABLE,
                columns=DOCUMENT_COLUMNS,
                order=[("created_at", False)],
                limit=self._fetch_limit,
                access_token=self._get_access_token(),
            )
            documents = [DakDocument.model_validate(row) for row in rows]
        except StoreError as e:
            self.logging.error("Fetching documents failed: %s", e.message)
            self._set_state(error=e.message)
            return OperationResult.failure(ErrorKind.STORE, e.message)
        except Exception as e:
            self.logging.exception("Fetching documents failed unexpectedly")
            self._set_state(error=str(e))
            return OperationResult.failure(ErrorKind.UNEXPECTED, str(e))
        finally:
            self._set_state(loading=False)

        self._set_state(documents=documents, error=None)
        self.logging.info("Fetched %d documents", len(documents))
        return OperationResult.success(documents)

    async def create(self, fields: DocumentCreate | dict) -> OperationResult[DakDocument]:
        """Register a new document and refresh the list.

        Direction, department, subject and sender are required; nothing is sent
        to the store when one of them is missing.

        Returns:
            OperationResult[DakDocument]: The stored row with its server-assigned id and DAK number.
        """
        if isinstance(fields, dict):
            try:
                fields = DocumentCreate.model_validate(fields)
            except ValidationError as e:
                return self._validation_failure(self._describe_validation_error(e))

        missing = self._get_missing_fields(fields)
        if missing:
            self.logging.warning("Document not registered, missing fields: %s", ", ".join(missing))
            return self._validation_failure(REQUIRED_FIELDS_MESSAGE)

        row = self._build_insert_row(fields)
        self.logging.debug("Inserting document: %s", row)
        try:
            stored = await self._store.do_insert(DOCUMENTS_TABLE, row, access_token=self._get_access_token())
            created = DakDocument.model_validate(stored)
        except StoreError as e:
            self.logging.error("Registering document failed: %s", e.message)
            return OperationResult.failure(ErrorKind.STORE, e.message)
        except Exception as e:
            self.logging.exception("Registering document failed unexpectedly")
            return OperationResult.failure(ErrorKind.UNEXPECTED, str(e))

        self.logging.info("Registered %s DAK %s", created.type.value, created.dak_number, color="green")
        await self.fetch()
        return OperationResult.success(created)

    async def update(self, document_id: str, patch: DocumentUpdate | dict) -> OperationResult[DakDocument]:
        """Apply a partial patch to one document and refresh the list.

        Only the fields set on the patch are sent. Status changes are not
        checked against the previous status.

        Returns:
            OperationResult[DakDocument]: The patched row.
        """
        if not document_id:
            return self._validation_failure("Document id is required.")
        if isinstance(patch, dict):
            try:
                patch = DocumentUpdate.model_validate(patch)
            except ValidationError as e:
                return self._validation_failure(self._describe_validation_error(e))

        changes = patch.model_dump(exclude_unset=True, mode="json")
        if not changes:
            return self._validation_failure("No fields to update.")

        try:
            rows = await self._store.do_update(
                DOCUMENTS_TABLE,
                match={"id": document_id},
                patch=changes,
                access_token=self._get_access_token(),
            )
            if not rows:
                raise StoreError(f"Document {document_id} not found.")
            updated = DakDocument.model_validate(rows[0])
        except StoreError as e:
            self.logging.error("Updating document %s failed: %s", document_id, e.message)
            return OperationResult.failure(ErrorKind.STORE, e.message)
        except Exception as e:
            self.logging.exception("Updating document %s failed unexpectedly", document_id)
            return OperationResult.failure(ErrorKind.UNEXPECTED, str(e))

        self.logging.info("Updated DAK %s (%s)", updated.dak_number, ", ".join(sorted(changes)))
        await self.fetch()
        return OperationResult.success(updated)

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _get_access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    def _set_state(self, **changes) -> None:
        if self._disposed:
            self.logging.debug("Discarding state change on disposed document service: %s", sorted(changes))
            return
        for name, value in changes.items():
            setattr(self, name, value)

    def _get_missing_fields(self, fields: DocumentCreate) -> list[str]:
        missing = []
        for name in REQUIRED_CREATE_FIELDS:
            value = getattr(fields, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def _build_insert_row(self, fields: DocumentCreate) -> dict:
        """Turn caller fields into an insert row.

        Empty optional values become explicit None, unset ones get the register defaults.
        """
        values = fields.model_dump(mode="json")
        row = {key: value if value not in ("", None) else None for key, value in values.items()}
        row["branch"] = row["branch"] or "main"
        row["priority"] = row["priority"] or "medium"
        row["status"] = row["status"] or "received"
        row["date_received"] = row["date_received"] or datetime.now(timezone.utc).isoformat()
        return row

    def _validation_failure(self, message: str) -> OperationResult:
        return OperationResult.failure(ErrorKind.VALIDATION, message)

    def _describe_validation_error(self, error: ValidationError) -> str:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in error.errors()})
        return f"Invalid document fields: {', '.join(fields)}"
