import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealplanner.utilities.constants import NOTHING_PLANNED_MESSAGE


def generate_pdf_for_week(plan_view, shopping_list):
    """Printable page: the week's meals (Day / Meal) followed by the shopping list with checkboxes."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph("Weekly Meal Plan", styles["Title"]),
        Spacer(1, 12),
    ]

    data = [["Day", "Meal"]]
    for day, meal in plan_view.items():
        data.append([day, meal["name"] if meal else "-"])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 16))
    elements.append(Paragraph("Shopping List", styles["Heading2"]))

    if shopping_list.nothing_planned:
        elements.append(Paragraph(NOTHING_PLANNED_MESSAGE, styles["Normal"]))
    else:
        for item in shopping_list.items:
            box = "[x]" if item.checked else "[ ]"
            elements.append(Paragraph(f"{box} {escape(item.label)}", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
