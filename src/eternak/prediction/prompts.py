"""
Prompt content for livestock health prediction.
"""

from eternak.prediction.models import PredictLivestockHealthInput

SYSTEM_PROMPT = (
    "You are an expert veterinarian specializing in livestock health management. "
    "Based on the provided health records, predict potential future health issues "
    "for the livestock and suggest preventive measures. All outputs (issue, "
    "likelihood, and recommendations) must be in Indonesian."
)

EXAMPLE_OUTPUT = """{
  "animalId": "KIT-01",
  "predictedIssues": [
    {
      "issue": "Pneumonia",
      "likelihood": "Sedang",
      "recommendations": "Tingkatkan ventilasi dan pantau gejala pernapasan secara rutin. Pastikan kandang tetap kering dan bersih."
    },
    {
      "issue": "Koreng Kaki (Foot Rot)",
      "likelihood": "Rendah",
      "recommendations": "Jaga kebersihan dan kekeringan area kandang, terutama di sekitar tempat pakan dan minum. Lakukan pemeriksaan kuku secara berkala."
    },
    {
      "issue": "Kembung (Bloat)",
      "likelihood": "Tinggi",
      "recommendations": "Hindari perubahan pakan yang mendadak. Sediakan akses air bersih yang cukup dan berikan pakan serat kasar sebelum ternak digembalakan ke padang rumput hijau."
    }
  ]
}"""


def format_record_lines(data: PredictLivestockHealthInput) -> str:
    lines = []
    for record in data.health_records:
        line = f"  - Date: {record.date}, Type: {record.type}, Detail: {record.detail}"
        if record.notes:
            line += f", Notes: {record.notes}"
        lines.append(line)
    return "\n".join(lines)


def build_user_prompt(data: PredictLivestockHealthInput) -> str:
    """Animal id, one line per health record, and the expected JSON shape."""
    return f"""Animal ID: {data.animal_id}

Health Records:
{format_record_lines(data)}

Based on this history, predict potential health issues, their likelihood (Tinggi, Sedang, or Rendah), and recommendations. The response must be in JSON format.

Example JSON output:
{EXAMPLE_OUTPUT}
"""
