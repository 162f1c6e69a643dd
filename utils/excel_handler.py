"""
Excel export helpers
Builds the registration roster workbook for category and custom reports
"""

import pandas as pd
from io import BytesIO

from utils.pdf_report import ROSTER_COLUMNS, roster_row


class ExcelHandler:
    def __init__(self):
        self.column_widths = {
            'A': 28,  # Name
            'B': 36,  # Team / Place
            'C': 8,   # Stage
            'D': 11,  # Non-Stage
            'E': 60,  # Programs
            'F': 12   # Date
        }

    @staticmethod
    def sheet_name(category):
        """
        Worksheet title for a category, within Excel's 31 character limit
        """
        return f'{(category or "all").capitalize()} Registrations'[:31]

    def export_registrations(self, registrations, category):
        """
        Export registrations as an .xlsx roster with the PDF roster columns
        """
        rows = [roster_row(registration) for registration in registrations]

        # Column order must match the PDF roster
        df = pd.DataFrame(rows, columns=ROSTER_COLUMNS)

        sheet_name = self.sheet_name(category)
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)

            worksheet = writer.sheets[sheet_name]
            for col, width in self.column_widths.items():
                worksheet.column_dimensions[col].width = width

        output.seek(0)
        return output.getvalue()
