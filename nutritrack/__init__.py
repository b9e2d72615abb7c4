# -*- coding: utf-8 -*-
"""NutriTrack companion service.

Period range resolution, daily meal reminders and a thin client for the
nutrition REST backend.
"""
