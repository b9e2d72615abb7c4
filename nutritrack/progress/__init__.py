# -*- coding: utf-8 -*-
"""Progress metrics over already-aggregated daily summaries."""
