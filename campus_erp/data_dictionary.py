"""
campus_erp/data_dictionary.py

Column -> description mapping shown under the roster table in the UI.
"""

DATA_DICTIONARY = {
    "id": "Unique student identifier, assigned at admission (never changes).",
    "name": "Student's full name.",
    "branch": "Department / branch of study (e.g., Computer Engg, Civil).",
    "year": "Year of study (usually 1–5).",
    "hostel": "Hostel block the student is allocated to; blank if none.",
    "fees_paid": "Total fees paid so far, in rupees. Only ever increases.",
    "admission_date": "Date the student was admitted (YYYY-MM-DD).",
}
