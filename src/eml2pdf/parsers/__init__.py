#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Message loading and message tree access for eml2pdf."""
