# -*- coding: utf-8 -*-
"""Coaching platform backend: versioned client plans, coach overrides and check-in triage."""
