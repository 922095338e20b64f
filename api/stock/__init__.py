"""
Parts inventory: spreadsheet ingestion into the `repuestos` table.
"""
