"""Command-line interface for ensek-check.

Usage:
    ensek-check config
    ensek-check login
    ensek-check reset
    ensek-check buy <id> <quantity> [--settle-delay SECONDS]
    ensek-check orders [--before YYYY-MM-DD]
"""
