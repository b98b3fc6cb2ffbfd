"""
GrandCentral action catalog.

Explicit dispatch table of every (resource, operation) pair the action
node exposes, with the fields each operation accepts. Field entries are
a bare name for string fields, or ``(name, kind[, default])``.
"""

from typing import Dict, List, Tuple

from .types import ActionDefinition, ActionField, FieldKind

STRING = FieldKind.STRING
NUMBER = FieldKind.NUMBER
BOOLEAN = FieldKind.BOOLEAN

RESOURCES: Dict[str, str] = {
    "activities": "Activities",
    "billing": "Billing",
    "checklists": "Checklists",
    "comments": "Comments",
    "commissions": "Commissions",
    "contacts": "Contacts",
    "deals": "Deals",
    "financial": "Financial",
    "ideas": "Ideas",
    "knowledge-base": "Knowledge Base",
    "marketing-board": "Marketing Board",
    "organizations": "Organizations",
    "projects": "Projects",
    "proposals": "Proposals",
    "reviews": "Reviews",
    "subscriptions": "Subscriptions",
    "support": "Support",
    "system": "System",
    "tasks": "Tasks",
    "timesheets": "Timesheets",
    "transactions": "Transactions",
    "user": "User",
    "users": "Users",
}

DEFAULT_RESOURCE = "activities"

_CATALOG = {
    "activities": [
        ("getActivities", "Get Activities", [
            "contactId", "orgId", "projectId", "dealId", "activityType", "startDate",
            "endDate", ("allOrgs", BOOLEAN, False),
        ]),
        ("createActivity", "Create Activity", [
            "contact", "notesResult", "activityType", "content", "forDate",
            ("firstInterview", BOOLEAN), "objectId", "objectType",
            ("incoming", BOOLEAN), "orgId", ("isMarketingBoard", BOOLEAN),
        ]),
        ("createProjectActivity", "Create Project Activity", [
            "projectId", "contact", "notesResult", "activityType", "content",
            "forDate", ("firstInterview", BOOLEAN), ("incoming", BOOLEAN), "orgId",
        ]),
        ("createDealActivity", "Create Deal Activity", [
            "dealId", "contact", "notesResult", "activityType", "content", "forDate",
            ("firstInterview", BOOLEAN), ("incoming", BOOLEAN), "orgId",
        ]),
        ("createOrderActivity", "Create Order Activity", [
            "orderId", "contact", "notesResult", "activityType", "content", "forDate",
            ("firstInterview", BOOLEAN), ("incoming", BOOLEAN), "orgId",
        ]),
        ("createContactActivity", "Create Contact Activity", [
            "contactId", "notesResult", "activityType", "content", "forDate",
            ("firstInterview", BOOLEAN), ("incoming", BOOLEAN), "orgId",
        ]),
    ],
    "billing": [
        ("searchBillingInvoices", "Search Billing Invoices", [
            "organization_id", "payment_status", "module_type", "start_date",
            "end_date", "limit",
        ]),
    ],
    "checklists": [
        ("getChecklists", "Get Checklists", [
            "search", "status", "assigneeId", "recurring", ("isSequential", BOOLEAN),
            "limit",
        ]),
        ("getChecklist", "Get Checklist", [
            "checklistId",
        ]),
        ("createChecklist", "Create Checklist", [
            "title", "description", ("isSequential", BOOLEAN, True),
            ("recurring", STRING, "one-time"), "date", "templateId",
            "completeStepsOrder",
        ]),
        ("deleteChecklist", "Delete Checklist", [
            "checklistId",
        ]),
        ("toggleChecklistStep", "Toggle Checklist Step", [
            "stepId", ("completeSubSteps", BOOLEAN),
        ]),
        ("addChecklistSection", "Add Checklist Section", [
            "checklistId", "name",
        ]),
        ("addChecklistStep", "Add Checklist Step", [
            "checklistId", "name", "sectionId", "instructions", "link", "parentStepId",
        ]),
    ],
    "comments": [
        ("getComments", "Get Comments", [
            "type", "objectId",
        ]),
    ],
    "commissions": [
        ("getCommissionPeriods", "Get Commission Periods", []),
        ("getCommissions", "Get Commissions", [
            "periodId", "dateRange",
        ]),
    ],
    "contacts": [
        ("tagContact", "Tag Contact", [
            "contact", "tag",
        ]),
        ("addNote", "Add Note", [
            "contact", "note",
        ]),
        ("removeContactTag", "Remove Contact Tag", [
            "contact", "tag",
        ]),
        ("findContacts", "Find Contacts", [
            "query", "type",
        ]),
        ("createContact", "Create Contact", [
            "orgId", "firstName", "lastName", "title", "status", "phones", "emails",
            "timeZone", "ownerId",
        ]),
    ],
    "deals": [
        ("findDeals", "Find Deals", [
            "orgId", "search", "status", "boardId", "stageId", "ownerId", "startDate",
            "endDate",
        ]),
        ("getDeal", "Get Deal Details", [
            "dealId",
        ]),
        ("createDeal", "Create Deal", [
            "name", "orgId", "boardName", "value", "contactId", "stageName",
            "ownerName", "ownerId", "expectedClosed", "interval", ("noValue", BOOLEAN),
        ]),
        ("changeDealStatus", "Change Deal Status", [
            "deal", "status", "lostExplain",
        ]),
        ("changeDealOwner", "Change Deal Owner", [
            "deal", "owner",
        ]),
        ("changeDealStage", "Change Deal Stage", [
            "dealId", "stageId",
        ]),
        ("getDealBoards", "Get Deal Boards", []),
        ("getDealStages", "Get Deal Stages", [
            "companyId", "boardId",
        ]),
    ],
    "financial": [
        ("getTransactions", "Get Transactions", [
            "orgId", "status", "type",
        ]),
    ],
    "ideas": [
        ("listIdeas", "List Ideas", [
            "search", "status", "resolved", "limit",
        ]),
        ("voteIdea", "Vote Idea", [
            "ideaId",
        ]),
        ("createIdea", "Create Idea", [
            "title", "description", "status", "categories",
        ]),
        ("addIdeaComment", "Add Idea Comment", [
            "ideaId", "comment", ("resolved", BOOLEAN), "visibility",
        ]),
        ("getIdeaCategories", "Get Idea Categories", []),
    ],
    "knowledge-base": [
        ("searchKnowledgeBase", "Search Knowledge Base", [
            "query", ("limit", NUMBER),
        ]),
        ("getKnowledgeBaseArticle", "Get Knowledge Base Article", [
            "articleId",
        ]),
        ("getKnowledgeBaseCategories", "Get Knowledge Base Categories", []),
        ("getAiKbSearch", "AI Knowledge Base Search", [
            "query", ("limit", NUMBER),
        ]),
    ],
    "marketing-board": [
        ("getMarketingBoardItems", "Get Marketing Board Items", [
            "search", "assigned_to", "created_at", "status", "due_date", "due_date_gt",
            "due_date_gte", "due_date_lt", "due_date_lte", "due_date_from",
            "due_date_to", "org_id", "limit",
        ]),
    ],
    "organizations": [
        ("removeOrganizationTag", "Remove Organization Tag", [
            "organization", "tag", ("untagAllContacts", BOOLEAN, False),
        ]),
        ("tagOrganization", "Tag Organization", [
            "organization", "tag", ("tagAllContacts", BOOLEAN, False),
        ]),
        ("findOrganizations", "Find Organizations", [
            "query", "type",
        ]),
        ("searchMultipleOrganizations", "Search Multiple Organizations", []),
        ("searchOrganizationsWithMeta", "Search Organizations With Meta", [
            "find",
        ]),
        ("createOrganization", "Create Organization", [
            "name", "status", "currency", "owner", ("isContact", BOOLEAN), "firstName",
            "lastName", "phones", "emails",
        ]),
        ("getOrganizationStatuses", "Get Organization Statuses", []),
        ("getOrganization", "Get Organization", [
            "organizationId", ("projects", BOOLEAN, False), ("deals", BOOLEAN, False),
            ("subscriptions", BOOLEAN, False), ("tickets", BOOLEAN, False),
            ("transactions", BOOLEAN, False), ("invoices", BOOLEAN, False),
            ("workorders", BOOLEAN, False), ("orders", BOOLEAN, False),
            ("activities", BOOLEAN, False),
        ]),
        ("addOrganizationNote", "Add Organization Note", [
            ("orgId", NUMBER), "note",
        ]),
    ],
    "projects": [
        ("changeProjectStage", "Change Project Stage", [
            "projectId", "stageId",
        ]),
        ("createProject", "Create Project", [
            "title", "orgId", "boardId", "contactId", "stageId", "accountManager",
            "salesRep", "hours", "templateId", "description",
        ]),
        ("getProjectTemplates", "Get Project Templates", []),
        ("updateProjectAssignments", "Update Project Assignments", [
            "projectId", "accountManager", "salesRep",
        ]),
        ("changeProjectStatus", "Change Project Status", [
            "projectId", "status",
        ]),
        ("archiveProject", "Archive Project", [
            "projectId", ("archive", BOOLEAN),
        ]),
        ("findProjects", "Find Projects", [
            "orgId", "search", "startDate", "endDate", "completedAt", "accountManager",
            ("limit", NUMBER, 5),
        ]),
        ("getProject", "Get Project Details", [
            "projectId",
        ]),
        ("getProjectBoards", "Get Project Boards", []),
        ("getProjectStages", "Get Project Stages", [
            "companyId", "boardId",
        ]),
        ("searchProjectServices", "Search Project Services", [
            "type", "frequency", "import_type", "currency", "active", "taxable",
            "limit",
        ]),
    ],
    "proposals": [
        ("searchProposals", "Search Proposals", [
            "orgId", "status", "created_at", "assigned_at", "limit",
        ]),
        ("proposalTemplates", "Get Proposal Templates", [
            "status", ("limit", NUMBER, 50),
        ]),
        ("createProposal", "Create Proposal", [
            "title", "orgId", "signerIds", ("templateId", NUMBER), "addressId",
        ]),
        ("getProposalTemplate", "Get Proposal Template", [
            "id",
        ]),
    ],
    "reviews": [
        ("getReviews", "Get Reviews", [
            "after", "search", "type", "orderBy", "limit", "page",
        ]),
    ],
    "subscriptions": [
        ("getSubscriptions", "Get Subscriptions", [
            "organization_id", "cycle", "subscription_status", "start_date", "month",
            "year", "payment_method", "sales_rep", "limit",
        ]),
    ],
    "support": [
        ("getSupportTickets", "Get Support Tickets", [
            "search", "status", "category", "channel", "assignedTo", "createdBy",
            "priority", ("limit", NUMBER, 50), ("page", NUMBER, 1),
        ]),
        ("getSupportTicket", "Get Support Ticket", [
            ("ticketId", NUMBER),
        ]),
        ("getSupportTicketMessages", "Get Support Ticket Messages", [
            ("ticketId", NUMBER),
        ]),
        ("getSupportTicketTaskDetails", "Get Support Ticket Task Details", [
            ("ticketId", NUMBER),
        ]),
        ("addSummaryToSupportTicket", "Add Summary to Support Ticket", [
            ("ticketId", NUMBER), "summary",
        ]),
        ("addDraftReplyToSupportTicket", "Add Draft Reply to Support Ticket", [
            ("ticketId", NUMBER), "message",
        ]),
        ("createSupportTicket", "Create Support Ticket", [
            "channelId", "subject", "body", ("orgId", NUMBER), "from_email",
            "firstName", "lastName", "email", "categoryId", ("priority", NUMBER),
            "responseType",
        ]),
        ("getSupportChannels", "Get Support Channels", []),
        ("getSupportCategories", "Get Support Categories", []),
        ("getSupportStatuses", "Get Support Statuses", []),
        ("ticketReply", "Reply to Ticket", [
            ("ticketId", NUMBER), "body",
        ]),
    ],
    "system": [
        ("info", "Get Info", []),
    ],
    "tasks": [
        ("listTasks", "List Tasks", [
            "query", "status", "userId", "email", "firstName", "lastName", "orgId",
            "limit",
        ]),
        ("createTask", "Create Task", [
            "title", "content", "priority", "dueDate", "orgId", "assignees",
            "parentId",
        ]),
        ("searchTasks", "Search Tasks", [
            "query", "status", "userId", "email", "firstName", "lastName", "orgId",
            "limit",
        ]),
        ("markTaskCompleted", "Mark Task Completed", [
            "taskId",
        ]),
    ],
    "timesheets": [
        ("getTimesheet", "Get Timesheet", [
            "startDate", "endDate", "userIds",
        ]),
    ],
    "transactions": [
        ("refundTransaction", "Refund Transaction", [
            "transactionId", "amount", "salesTax",
        ]),
    ],
    "user": [
        ("getMyData", "Get My Data", [
            "subscriptionBoard", "subscriptionFilter", "dealBoard", "dealFilter",
            "taskStatus", "ticketStatus", "projectStatus", ("enabledOldData", BOOLEAN),
        ]),
    ],
    "users": [
        ("findUsers", "Find Users or Staff", [
            "query", "type", "role",
        ]),
        ("getPTO", "Get PTO", [
            "userId",
        ]),
    ],
}


def _to_field(entry) -> ActionField:
    if isinstance(entry, str):
        return ActionField(entry)
    return ActionField(*entry)


def _build_catalog() -> Dict[Tuple[str, str], ActionDefinition]:
    actions = {}
    for resource, operations in _CATALOG.items():
        for operation, display_name, fields in operations:
            definition = ActionDefinition(
                resource=resource,
                operation=operation,
                display_name=display_name,
                fields=tuple(_to_field(entry) for entry in fields),
            )
            actions[definition.key] = definition
    return actions


ACTIONS: Dict[Tuple[str, str], ActionDefinition] = _build_catalog()


def get_action(resource: str, operation: str) -> ActionDefinition:
    """
    Look up a catalog action.

    Raises:
        ValueError: If the (resource, operation) pair is not in the catalog
    """
    definition = ACTIONS.get((resource, operation))
    if definition is None:
        raise ValueError(f"Unknown GrandCentral action: {resource}/{operation}")
    return definition


def list_operations(resource: str) -> List[ActionDefinition]:
    """Get the actions of one resource, in catalog order."""
    return [d for d in ACTIONS.values() if d.resource == resource]


def default_operation(resource: str) -> str:
    """Get the operation preselected for a resource."""
    operations = list_operations(resource)
    if not operations:
        raise ValueError(f"Unknown GrandCentral resource: {resource}")
    return operations[0].operation


def all_fields() -> Dict[str, ActionField]:
    """
    Get every distinct field name across the catalog.

    A name declared the same way everywhere keeps its kind and default.
    A name whose declarations disagree gets no default (and falls back to
    a string input when the kinds differ); the active action's own
    default is applied at dispatch time instead.
    """
    declarations: Dict[str, List[ActionField]] = {}
    for definition in ACTIONS.values():
        for f in definition.fields:
            declarations.setdefault(f.name, []).append(f)

    fields: Dict[str, ActionField] = {}
    for name, declared in declarations.items():
        first = declared[0]
        if all(f == first for f in declared):
            fields[name] = first
        elif all(f.kind is first.kind for f in declared):
            fields[name] = ActionField(name, first.kind)
        else:
            fields[name] = ActionField(name, STRING)
    return fields
