"""Ponto package.

Time-clock accounting and timesheet reports, organized by feature modules
(punches, worktime, reports) with a thin Flask controller layer on top of
pure service/calculator layers.
"""
