# Records used to seed the in-memory store and as the dashboard fallback
# when the API cannot be reached. Field names intentionally mix the legacy
# spellings (section, severity, date) that normalization folds together.

SAMPLE_DEFECTS = [
    {"id": "1", "section": "Colombo-Panadura", "type": "Surface Crack", "severity": "Medium", "status": "In Progress", "date": "2025-03-20", "assignedTo": "Maintenance Team 3"},
    {"id": "2", "section": "Panadura-Kalutara", "type": "Deep Crack", "severity": "High", "status": "Pending", "date": "2025-03-21", "assignedTo": "Unassigned"},
    {"id": "3", "section": "Kalutara-Aluthgama", "type": "Weld Failure", "severity": "Critical", "status": "Pending", "date": "2025-03-22", "assignedTo": "Unassigned"},
    {"id": "4", "section": "Aluthgama-Galle", "type": "Surface Crack", "severity": "Low", "status": "Resolved", "date": "2025-03-18", "assignedTo": "Maintenance Team 1"},
    {"id": "5", "section": "Galle-Matara", "type": "Deep Crack", "severity": "Medium", "status": "In Progress", "date": "2025-03-19", "assignedTo": "Maintenance Team 2"},
]

SAMPLE_USERS = [
    {"id": "sample1", "name": "John Inspector", "email": "john@example.com", "role": "inspector", "department": "Colombo-Panadura", "isActive": True},
    {"id": "sample2", "name": "Jane Maintenance", "email": "jane@example.com", "role": "maintenance", "department": "Team 1", "isActive": False},
]
