"""
Configuration constants and environment setup.
"""

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "time-tracking.db"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# NOTION CONFIGURATION
# =============================================================================

NOTION_API_KEY = os.environ.get("NOTION_API_KEY", "")
NOTION_TIME_TRACKING_DB_ID = os.environ.get("NOTION_TIME_TRACKING_DB_ID", "")
NOTION_CALENDAR_DB_ID = os.environ.get("NOTION_CALENDAR_DB_ID", "")

# =============================================================================
# TIME & BILLING PERIOD RULES
# =============================================================================

TIMEZONE = ZoneInfo(os.environ.get("TIMEZONE", "America/Denver"))

# Day-of-month on or before which "now" still reports on the previous month
REPORTING_CUTOFF_DAY = 15

PAYMENT_TERMS_DAYS = 45
PAYMENT_DUE_DAY = 15

# =============================================================================
# BILLING CONFIGURATION
# =============================================================================

HOURLY_RATE = Decimal(os.environ.get("HOURLY_RATE", "25.00"))
CLIENT_NAME = os.environ.get("CLIENT_NAME", "The Whitaker Family")
CONTACT_NAME = os.environ.get("CONTACT_NAME", "Jordan Reyes")
CONTACT_EMAIL = os.environ.get("CONTACT_EMAIL", "jordan.reyes@example.com")
CONTACT_PHONE = os.environ.get("CONTACT_PHONE", "(303) 555-0142")
PAYEE_NAME = os.environ.get("PAYEE_NAME", "Jordan Reyes")
SERVICE_DESCRIPTION = os.environ.get("SERVICE_DESCRIPTION", "Household Services")


@dataclass(frozen=True)
class BillingConfig:
    """Fixed business rules handed to the report builders."""

    hourly_rate: Decimal
    client_name: str
    contact_name: str
    contact_email: str
    contact_phone: str
    payee_name: str
    service_description: str

    @property
    def contact_line(self) -> str:
        return f"{self.contact_name} | {self.contact_email} | {self.contact_phone}"


def get_billing_config() -> BillingConfig:
    """Build the billing configuration from environment settings."""
    return BillingConfig(
        hourly_rate=HOURLY_RATE,
        client_name=CLIENT_NAME,
        contact_name=CONTACT_NAME,
        contact_email=CONTACT_EMAIL,
        contact_phone=CONTACT_PHONE,
        payee_name=PAYEE_NAME,
        service_description=SERVICE_DESCRIPTION,
    )


# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

EXPORT_HEADERS = ["Date", "Hours", "Description", "Notes"]

# =============================================================================
# EMAIL CONFIGURATION
# =============================================================================

FROM_EMAIL = os.environ.get("FROM_EMAIL", "")
INVOICE_EMAIL = os.environ.get("INVOICE_EMAIL", "")
ERROR_EMAIL = os.environ.get("ERROR_EMAIL", "")

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_KEY = os.environ.get("TIME_TRACKING_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
