"""Account Administration Backend.

Role-based user management for students, teachers, admins and super admins:
signup, login, teacher approval and soft-delete/restore of admin accounts.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
