"""Verify SMTP settings by connecting and authenticating without sending mail."""

import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import configure_logging
from app.application.services.notification_service import check_email_config


def main() -> int:
    configure_logging()
    if check_email_config():
        print("✅ Email configuration is valid")
        return 0

    print("⚠️ Email not configured or unreachable - credentials will be logged instead")
    print("To set up real email:")
    print("  1. Create a .env file in the project root")
    print("  2. Add: EMAIL_USER=your-email@example.com")
    print("  3. Add: EMAIL_PASSWORD=your-app-password")
    print("  4. Optionally set SMTP_HOST / SMTP_PORT / EMAIL_FROM")
    print("  5. Restart the server")
    return 1


if __name__ == "__main__":
    sys.exit(main())
