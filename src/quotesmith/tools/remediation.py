"""Row remediation tools for the assistant."""

import json
import logging

from ..ops.models import (
    ClearColumnRequest,
    DeleteRowsRequest,
    FixMissingQuantitiesRequest,
    GenerateDownloadRequest,
    OperationResponse,
    UpdateCellRequest,
)
from ..ops.session import RemediationSession
from ..parsing.models import RowField
from .registry import Tool, ToolParameter, ToolRegistry

logger = logging.getLogger(__name__)

FIELD_NAMES = [field.value for field in RowField]


def _payload(response: OperationResponse) -> dict:
    # NaN and infinite values come back as null
    return json.loads(response.model_dump_json(by_alias=True, exclude_none=True))


class RemediationTools:
    """Tools that edit a session's rows. Arguments are validated with pydantic."""

    def __init__(self, session: RemediationSession):
        self.session = session

    def register(self, registry: ToolRegistry):
        """Register all remediation tools with the registry."""
        registry.register(self._fix_missing_quantities_tool())
        registry.register(self._generate_download_tool())
        registry.register(self._update_cell_tool())
        registry.register(self._delete_rows_tool())
        registry.register(self._clear_column_tool())

    def _fix_missing_quantities_tool(self) -> Tool:
        def handler(**kwargs) -> dict:
            request = FixMissingQuantitiesRequest.model_validate(kwargs)
            return _payload(
                self.session.fix_missing_quantities(
                    request.default_quantity, request.affected_row_numbers
                )
            )

        return Tool(
            name="fix_missing_quantities",
            description=(
                "Fix rows that have missing quantity values. Returns the number of rows "
                "fixed and the changes made. Call this only when the user asks to fix "
                "missing quantities."
            ),
            parameters=[
                ToolParameter(
                    name="defaultQuantity",
                    type="number",
                    description="Default quantity value to use for missing entries",
                    required=False,
                    default=1,
                ),
                ToolParameter(
                    name="affectedRowNumbers",
                    type="array",
                    items="integer",
                    description=(
                        "Specific row numbers to fix. If not provided, all rows with "
                        "missing quantities will be fixed."
                    ),
                    required=False,
                ),
            ],
            handler=handler,
        )

    def _generate_download_tool(self) -> Tool:
        def handler(**kwargs) -> dict:
            request = GenerateDownloadRequest.model_validate(kwargs)
            return _payload(
                self.session.generate_corrected_download(request.include_remediation_notes)
            )

        return Tool(
            name="generate_corrected_download",
            description=(
                "Generate a corrected file with all applied fixes and return a download "
                "link. Call this after fixing data issues when the user wants the file."
            ),
            parameters=[
                ToolParameter(
                    name="includeRemediationNotes",
                    type="boolean",
                    description="Whether to include notes about what was changed",
                    required=False,
                    default=True,
                ),
            ],
            handler=handler,
        )

    def _update_cell_tool(self) -> Tool:
        def handler(**kwargs) -> dict:
            request = UpdateCellRequest.model_validate(kwargs)
            return _payload(
                self.session.update_cell(request.row_number, request.field, request.new_value)
            )

        return Tool(
            name="update_cell_value",
            description=(
                "Update a specific cell value in a row, e.g. change quantity from 3 to 4 "
                "in row 2."
            ),
            parameters=[
                ToolParameter(
                    name="rowNumber",
                    type="integer",
                    description="The row number to update (from the rowNumber field in the data)",
                ),
                ToolParameter(
                    name="field",
                    type="string",
                    description="The field/column to update",
                    enum=FIELD_NAMES,
                ),
                ToolParameter(
                    name="newValue",
                    type="string",
                    description="The new value to set",
                ),
            ],
            handler=handler,
        )

    def _delete_rows_tool(self) -> Tool:
        def handler(**kwargs) -> dict:
            request = DeleteRowsRequest.model_validate(kwargs)
            return _payload(self.session.delete_rows(request.row_numbers))

        return Tool(
            name="delete_rows",
            description="Delete specific rows from the data.",
            parameters=[
                ToolParameter(
                    name="rowNumbers",
                    type="array",
                    items="integer",
                    description="The list of row numbers to delete",
                ),
            ],
            handler=handler,
        )

    def _clear_column_tool(self) -> Tool:
        def handler(**kwargs) -> dict:
            request = ClearColumnRequest.model_validate(kwargs)
            return _payload(self.session.clear_column(request.field))

        return Tool(
            name="clear_column",
            description=(
                "Clear all data in a specific column. Also use this when the user asks to "
                "remove or delete a column; the column stays but its values are emptied."
            ),
            parameters=[
                ToolParameter(
                    name="field",
                    type="string",
                    description="The field/column to clear",
                    enum=FIELD_NAMES,
                ),
            ],
            handler=handler,
        )


def build_registry(session: RemediationSession) -> ToolRegistry:
    """Registry holding the remediation tools bound to one session."""
    registry = ToolRegistry()
    RemediationTools(session).register(registry)
    logger.debug(f"Registered {len(registry)} remediation tools")
    return registry
