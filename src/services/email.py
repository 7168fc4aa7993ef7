"""
Emailing generated invoices through MS Graph.
"""

import traceback
from pathlib import Path

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient
from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.email_address import EmailAddress
from msgraph.generated.models.file_attachment import FileAttachment
from msgraph.generated.models.item_body import ItemBody
from msgraph.generated.models.message import Message
from msgraph.generated.models.recipient import Recipient
from msgraph.generated.users.item.send_mail.send_mail_post_request_body import (
    SendMailPostRequestBody,
)

from core.config import (
    ERROR_EMAIL,
    FROM_EMAIL,
    GRAPH_APP_ID,
    GRAPH_CLIENT_SECRET,
    GRAPH_TENANT_ID,
    INVOICE_EMAIL,
    BillingConfig,
)
from models.entries import BillingSummary, Month
from services.invoices import format_money
from services.periods import resolve_payment_due_date
from services.reports import format_date_long, format_hours

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".csv": "text/csv",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

_graph_client: GraphServiceClient | None = None


def get_graph_client() -> GraphServiceClient:
    """Get or create the MS Graph client (lazy initialization)."""
    global _graph_client
    if _graph_client is None:
        credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(credentials=credential)
    return _graph_client


def format_invoice_email_body(
    month: Month, summary: BillingSummary, config: BillingConfig
) -> str:
    """Plain-text body listing each billed week and the amount due."""
    due_date = resolve_payment_due_date(month.last_day)
    lines = [f"Hello {config.client_name},", "", f"Attached is the invoice for {month.label}.", ""]

    for item in summary.line_items:
        lines.append(
            f"  Week {item.week_number}: {format_hours(item.hours)} hours - {format_money(item.amount)}"
        )

    lines.append("")
    lines.append(
        f"Total: {format_money(summary.total)} ({format_hours(summary.total_hours)} hours)"
    )
    lines.append(f"Payment due by {format_date_long(due_date)}.")
    lines.append("")
    lines.append("Thank you,")
    lines.append(config.payee_name)
    return "\n".join(lines)


def _attachment(file_path: Path) -> FileAttachment:
    with open(file_path, "rb") as f:
        content = f.read()
    return FileAttachment(
        odata_type="#microsoft.graph.fileAttachment",
        name=file_path.name,
        content_type=CONTENT_TYPES.get(file_path.suffix, "application/octet-stream"),
        content_bytes=content,
    )


async def send_invoice_email(
    month: Month, summary: BillingSummary, config: BillingConfig, files: list[Path]
):
    """Send the month's invoice documents to the client."""
    graph = get_graph_client()
    message = Message(
        subject=f"Invoice - {month.label}",
        body=ItemBody(
            content_type=BodyType.Text,
            content=format_invoice_email_body(month, summary, config),
        ),
        to_recipients=[Recipient(email_address=EmailAddress(address=INVOICE_EMAIL))],
        attachments=[_attachment(path) for path in files],
    )

    request_body = SendMailPostRequestBody(message=message, save_to_sent_items=True)

    await graph.users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
    print(f"Sent invoice email to {INVOICE_EMAIL}")


async def send_error_email(error: Exception):
    """Send error notification email."""
    graph = get_graph_client()
    subject = "Invoice Generation - Script Error"
    body_text = f"An error occurred while generating the invoice:\n\n{traceback.format_exc()}"

    message = Message(
        subject=subject,
        body=ItemBody(content_type=BodyType.Text, content=body_text),
        to_recipients=[Recipient(email_address=EmailAddress(address=ERROR_EMAIL))],
    )

    request_body = SendMailPostRequestBody(message=message, save_to_sent_items=True)

    try:
        await graph.users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
        print(f"Sent error email to {ERROR_EMAIL}")
    except Exception as e:
        print(f"Failed to send error email: {e}")
