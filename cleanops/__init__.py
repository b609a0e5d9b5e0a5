"""Cleanops backend package.

Holds the reminder engine together with the storage backends and the HTTP
surface used by the dashboards to pull and acknowledge notifications.
"""
