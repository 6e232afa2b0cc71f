# phrasing.py
# Builds the sentences handed to the announcer from structured engine output.
# The engine itself only produces ManeuverInstruction.text; every other
# spoken phrase is assembled here, on the caller side.

from .models import Hazard, ManeuverInstruction, RouteWarning, SurfaceTier


HAZARD_LABELS = {
    "pothole":                "Pothole",
    "construction":           "Construction zone",
    "dangerous_intersection": "Dangerous intersection",
    "poor_surface":           "Poor road surface",
    "debris":                 "Debris on road",
    "traffic_hazard":         "Traffic hazard",
    "steep":                  "Steep section",
    "flooding":               "Flooding",
}

SEVERITY_LABELS = {
    "high":   "High severity",
    "medium": "Moderate",
    "low":    "Minor",
}


def format_distance(distance_m: float) -> str:
    """Display form of a distance: '450 m', '1.2 km'."""
    if distance_m < 1000:
        return f"{distance_m:.0f} m"
    return f"{distance_m / 1000:.1f} km"


def spoken_distance(distance_m: float) -> str:
    """Distance phrase for voice guidance, rounded the way riders hear it."""
    if distance_m < 50:
        return "now"
    if distance_m < 100:
        return "in 50 meters"
    rounded = round(distance_m / 100) * 100
    if rounded < 1000:
        return f"in {rounded} meters"
    return f"in {distance_m / 1000:.1f} kilometers"


def turn_message(maneuver: ManeuverInstruction, distance_m: float) -> str:
    """'In 200 meters, Turn left'."""
    phrase = spoken_distance(distance_m)
    return f"{phrase[0].upper()}{phrase[1:]}, {maneuver.voice_text}"


def hazard_message(hazard: Hazard) -> str:
    """'Warning. High severity Pothole ahead. Verified by community. <title>.'"""
    label = HAZARD_LABELS.get(hazard.category, "Hazard")
    severity = SEVERITY_LABELS.get(hazard.severity, "")
    subject = f"{severity} {label}" if severity else label
    message = f"Warning. {subject} ahead."

    if hazard.is_verified:
        message += " Verified by community."

    # Skip titles that only repeat the hazard type
    title = hazard.title.strip()
    lowered = title.lower()
    if title and hazard.category.lower() not in lowered and label.lower() not in lowered:
        message += f" {title.rstrip('.')}."
    return message


def surface_message(warning: RouteWarning) -> str:
    """'Poor road surface ahead: gravel for 350 m.'"""
    length = format_distance(warning.length_m)
    if warning.tier is SurfaceTier.POOR:
        return f"Poor road surface ahead: {warning.surface} for {length}."
    return f"Unknown road surface ahead for {length}."
