# cfa_admin/services/plan_export_service.py
import pandas as pd
from io import StringIO

from cfa_admin.models.weightage import WeightagePlan
from cfa_admin.services.weightage_service import estimated_questions

CSV_COLUMNS = ["Code", "Chapter", "Enabled", "Weightage (%)", "Est. Questions"]


def get_plan_as_csv(plan: WeightagePlan) -> StringIO:
    """
    Export the chapter breakdown of a weightage plan.
    Disabled chapters are listed with 0 estimated questions.
    """
    rows = []
    for c in plan.chapters:
        rows.append({
            "Code": c.code,
            "Chapter": c.name,
            "Enabled": "Yes" if c.enabled else "No",
            "Weightage (%)": c.weight,
            "Est. Questions": estimated_questions(c, plan.total_questions)
        })

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)

    buffer = StringIO()
    df.to_csv(buffer, index=False)
    buffer.seek(0)
    return buffer
