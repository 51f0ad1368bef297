"""Identity bounded context: customer accounts, back-office staff and the
customer directory.

Customers register with an email and password and receive a customer token.
Staff accounts (superadmin, admin, worker) sign in to the back-office and
receive a staff token carrying their role.
"""

import structlog

logger = structlog.get_logger(__name__)
