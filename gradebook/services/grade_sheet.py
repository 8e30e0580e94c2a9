"""Excel grade sheet export for instructors."""

import logging
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from gradebook.models.course import InstructorRole
from gradebook.services.grading import GradeUpdatePolicy
from gradebook.services.record_store import RecordStore

logger = logging.getLogger(__name__)

# (header, grade record attribute, course maximum attribute)
SHEET_COLUMNS = [
    ("Mid Term", "mid_term", "max_mid_term"),
    ("Final Exam", "final_exam", "max_final_exam"),
    ("Quizzes", "quizzes", "max_quizzes"),
    ("Practical", "practical", "max_practical"),
    ("Total", "total", "max_total"),
]


class GradeSheetService:
    """Builds the roster grade sheet of a course."""

    def __init__(self, db: Session):
        self.db = db
        self.store = RecordStore(db)
        self.policy = GradeUpdatePolicy(db)

    def build_course_sheet(
        self,
        instructor_email: str,
        role: InstructorRole,
        course_code: str,
    ) -> bytes:
        """Render the course roster with every student's components as xlsx."""
        course = self.policy.get_taught_course(instructor_email, role, course_code)
        columns = [
            col for col in SHEET_COLUMNS
            if col[1] != "practical" or course.has_practical_component
        ]

        wb = Workbook()
        ws = wb.active
        ws.title = course.code[:31]

        # Styles
        title_font = Font(bold=True, size=14)
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        max_fill = PatternFill(start_color="8FAADC", end_color="8FAADC", fill_type="solid")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        center_align = Alignment(horizontal="center", vertical="center")

        last_col = get_column_letter(3 + len(columns))

        # Title row
        ws.merge_cells(f"A1:{last_col}1")
        title_cell = ws.cell(row=1, column=1, value=f"{course.code} - {course.name} (Semester {course.semester})")
        title_cell.font = title_font
        title_cell.alignment = center_align

        # Headers
        headers = ["Student Code", "Email", "Department"] + [col[0] for col in columns]
        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=2, column=col_idx, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = thin_border
            cell.alignment = center_align

        # Maximums row
        ws.cell(row=3, column=1, value="Maximum").font = Font(bold=True)
        for col_idx, (_, _, max_attr) in enumerate(columns, start=4):
            cell = ws.cell(row=3, column=col_idx, value=getattr(course, max_attr))
            cell.fill = max_fill
            cell.border = thin_border
            cell.alignment = center_align

        # One row per registered student
        row_idx = 4
        for record in sorted(course.grade_records, key=lambda r: r.student.email):
            student = record.student
            profile = student.student_profile
            values = [
                profile.student_code if profile else None,
                student.email,
                profile.department if profile else None,
            ] + [getattr(record, col[1]) for col in columns]
            for col_idx, value in enumerate(values, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.border = thin_border
            row_idx += 1

        # Column widths
        for col_idx, width in enumerate([15, 30, 20] + [12] * len(columns), start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        logger.info(f"Built grade sheet for {course.code} with {row_idx - 4} students")
        return output.getvalue()
