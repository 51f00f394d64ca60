from __future__ import annotations

from leadgrid.app.domain.models.opportunity import converted_lead_to_opportunity
from leadgrid.app.state import TableSession
from leadgrid.app.table.comparator import SortDirection, SortDirective
from leadgrid.app.table.view_engine import TableSpec
from leadgrid.app.ui.listing_view import DEFAULT_PAGE_SIZE, FieldDescriptor, ViewParameters

LEADS_SPEC = TableSpec(searchable_fields=("name", "company"), category_field="status")
OPPORTUNITIES_SPEC = TableSpec(searchable_fields=("name", "accountName"), category_field="stage")

LEADS_COLUMNS = (
    FieldDescriptor(id="id", label="ID"),
    FieldDescriptor(id="name", label="Name"),
    FieldDescriptor(id="company", label="Company"),
    FieldDescriptor(id="email", label="Email"),
    FieldDescriptor(id="source", label="Source"),
    FieldDescriptor(id="score", label="Score"),
    FieldDescriptor(id="status", label="Status"),
    FieldDescriptor(id="actions", label="Actions", sortable=False),
)

OPPORTUNITIES_COLUMNS = (
    FieldDescriptor(id="id", label="ID"),
    FieldDescriptor(id="name", label="Name"),
    FieldDescriptor(id="accountName", label="Account"),
    FieldDescriptor(id="stage", label="Stage"),
    FieldDescriptor(id="amount", label="Amount"),
    FieldDescriptor(id="actions", label="Actions", sortable=False),
)

LEADS_DEFAULT_SORT = SortDirective(property="score", direction=SortDirection.DESC)
OPPORTUNITIES_DEFAULT_SORT = SortDirective(property="id", direction=SortDirection.DESC)

# cells of the leads table that can be edited in place
LEADS_INLINE_FIELDS = ("email", "status")


def leads_session(page_size: int = DEFAULT_PAGE_SIZE) -> TableSession:
    return TableSession(
        spec=LEADS_SPEC,
        columns=list(LEADS_COLUMNS),
        params=ViewParameters(page_size=page_size, sort=LEADS_DEFAULT_SORT),
    )


def opportunities_session(page_size: int = DEFAULT_PAGE_SIZE) -> TableSession:
    return TableSession(
        spec=OPPORTUNITIES_SPEC,
        columns=list(OPPORTUNITIES_COLUMNS),
        params=ViewParameters(page_size=page_size, sort=OPPORTUNITIES_DEFAULT_SORT),
        projection_rule=converted_lead_to_opportunity,
    )
