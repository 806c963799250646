# -*- coding: utf-8 -*-
"""Weekly check-ins, progress photos and the overdue cadence."""
