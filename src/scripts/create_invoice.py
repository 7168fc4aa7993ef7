#!/usr/bin/env python3
"""
Generate the monthly invoice, hours log and CSV export from Notion time entries.

Writes the documents to output/invoices, records them in the SQLite database
and optionally emails them to the client.

Usage:
    uv run python src/scripts/create_invoice.py --month 2024-02 --email
"""

import argparse
import asyncio
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR, get_billing_config
from core.database import create_document_record, generate_document_name, get_connection
from models.entries import Month
from services.email import send_error_email, send_invoice_email
from services.hours_log import generate_hours_log_pdf
from services.invoices import format_money, generate_invoice_pdf
from services.periods import now_local, resolve_invoice_date, resolve_reporting_month
from services.reports import create_csv_export, format_date_long
from services.time_entries import fetch_month_entries


async def main(month_str: str | None = None, email: bool = False):
    """Main entry point for invoice generation."""
    try:
        # 1. Resolve the billing month
        now = now_local()
        if month_str:
            month = Month.parse(month_str)
            invoice_date = month.last_day
        else:
            month = resolve_reporting_month(now)
            invoice_date = resolve_invoice_date(now)
        print(f"Generating invoice for {month.label} (dated {format_date_long(invoice_date)})")

        # 2. Fetch entries
        entries = fetch_month_entries(month)
        print(f"Found {len(entries)} time entries")

        # 3. Render documents
        config = get_billing_config()
        invoice_bytes, summary = generate_invoice_pdf(entries, month, config, invoice_date)
        hours_log_bytes, total_hours = generate_hours_log_pdf(entries, month)
        csv_text = create_csv_export(entries, month)

        for item in summary.line_items:
            print(f"  - {item.period_label}: {item.hours:g}h, {format_money(item.amount)}")
        print(f"Total: {format_money(summary.total)} ({total_hours:g} hours)")

        # 4. Record and write files
        output_dir = OUTPUT_DIR / "invoices"
        output_dir.mkdir(parents=True, exist_ok=True)
        conn = get_connection()
        try:
            written = []
            for document_type, content, extension in [
                ("invoice", invoice_bytes, "pdf"),
                ("hours_log", hours_log_bytes, "pdf"),
                ("time_entries", csv_text.encode("utf-8"), "csv"),
            ]:
                name = generate_document_name(document_type, month, conn)
                output_path = output_dir / f"{name}.{extension}"
                output_path.write_bytes(content)
                create_document_record(
                    conn, document_type, name, month, len(entries), total_hours
                )
                written.append(output_path)
                print(f"Saved {document_type} to: {output_path}")
        finally:
            conn.close()

        # 5. Email the client
        if email:
            await send_invoice_email(month, summary, config, written)

        print("\nDone!")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        if email:
            await send_error_email(e)
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate the monthly invoice and hours log")
    parser.add_argument(
        "--month",
        help="Target month (YYYY-MM). Defaults to the current reporting month.",
    )
    parser.add_argument(
        "--email",
        action="store_true",
        help="Email the generated documents to the client",
    )
    args = parser.parse_args()

    asyncio.run(main(args.month, args.email))
