# -*- coding: utf-8 -*-
"""Coach-facing domain: overrides/edits, triage status and client views.

All operations here assume a caller holding ``auth.security.COACH_ROLES``.
"""
