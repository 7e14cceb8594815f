"""
Service d'export CSV/Excel / CSV/Excel export service.
Génère l'export journalier des rondes / Generates the daily patrol export.
"""

import csv
import io

from openpyxl import Workbook
from openpyxl.styles import Font

from guard_patrol.schemas.patrol import PatrolRead

PATROL_EXPORT_FIELDS = [
    "Date/Time",
    "Guard",
    "Checkpoint",
    "Latitude",
    "Longitude",
    "Distance (m)",
    "Checklist",
]


class ExportService:
    """Export des rondes vers CSV/XLSX / Patrol export to CSV/XLSX."""

    @staticmethod
    def patrol_to_row(record: PatrolRead) -> dict:
        """Aplatir une ronde / Flatten a patrol record."""
        return {
            "Date/Time": record.timestamp,
            "Guard": record.guard_name,
            "Checkpoint": record.checkpoint_name,
            "Latitude": f"{record.latitude:.6f}",
            "Longitude": f"{record.longitude:.6f}",
            "Distance (m)": round(record.distance_m),
            "Checklist": "; ".join(
                f"{item}: {'Yes' if done else 'No'}" for item, done in record.checklist_results.items()
            ),
        }

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """Générer un CSV UTF-8 BOM / Generate UTF-8 BOM CSV."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=fields, extrasaction="ignore", quoting=csv.QUOTE_ALL)
        writer.writeheader()
        for row in rows:
            writer.writerow({f: row.get(f, "") for f in fields})
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Patrols") -> bytes:
        """Générer un fichier Excel / Generate an Excel file."""
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # En-têtes / Headers
        for col_idx, field in enumerate(fields, 1):
            cell = ws.cell(row=1, column=col_idx, value=field)
            cell.font = Font(bold=True)

        # Données / Data rows
        for row_idx, row in enumerate(rows, 2):
            for col_idx, field in enumerate(fields, 1):
                ws.cell(row=row_idx, column=col_idx, value=row.get(field))

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
