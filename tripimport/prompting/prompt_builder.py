"""Instruction texts and provider request assembly.

This module is intentionally narrow: it only holds the instruction strings and
builds the provider `contents`/`generationConfig` structures from already parsed
inputs. Configuration lookup, transport, and response validation happen outside
this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed part ordering: instruction text first, serialized envelope second.
    - No hidden side effects (no I/O, no global state mutation).

Prompt contract model:
    - The rules below (variety, deduplication, time windows) are instructions to
      the provider, not locally enforced guarantees.
    - Caller text is forwarded as a JSON-serialized envelope, never interpolated
      into the instruction text.
"""

from typing import Any, Dict, List

from tripimport.core.types import ITEM_KINDS, PasteImportRequest


_KIND_UNION = " | ".join(f'"{kind}"' for kind in ITEM_KINDS)
_KIND_PIPE = "|".join(ITEM_KINDS)


# =========================================================
# ITEM SCHEMA (SHARED)
# =========================================================
# Embedded verbatim in both variants so the provider emits the same record shape.

ITEM_SCHEMA = f"""PasteImportItem schema (all fields must exist; can be empty strings/null):
{{
  "id": "UUID string",
  "kind": "{_KIND_PIPE}",
  "include": true,
  "dayID": "UUID string or null",
  "title": "string",
  "subtitle": "string",
  "location": "string",
  "notes": "string",
  "startTime": "ISO8601 string or null",
  "endTime": "ISO8601 string or null",
  "checklistItemsText": "string",
  "flightFromCode": "string",
  "flightToCode": "string",
  "flightNumber": "string",
  "confidence": 0.0,
  "sourceSnippet": "string"
}}"""


# =========================================================
# VARIANT A: LITERAL EXTRACTION
# =========================================================
# Segments pasted text into items. Nothing is invented beyond what the text says.

EXTRACTION_INSTRUCTION = f"""
You are an assistant that converts pasted travel text into STRICT JSON for an iOS trip planner.

Return ONLY valid JSON of this exact shape:
{{"items":[PasteImportItem...]}}

Rules:
- Do NOT include markdown or extra keys.
- Prefer grouping related lines into one item (hotel block, etc.).
- Preserve/produce sourceSnippet for each item.
- Use kind: {_KIND_UNION}
- Fill confidence (0..1).

{ITEM_SCHEMA}

If unsure about day assignment, set dayID to null.
"""


# =========================================================
# VARIANT B: GENERATIVE DAY PLANNING
# =========================================================
# Authors a full day of recommendations anchored to tripContext.destination.

PLANNING_INSTRUCTION = f"""
You are a travel-planning assistant for an iOS trip planner. You receive a JSON
message with the user's pasted text, known facts, the trip context, optional
personal preferences, and the items already on the trip (existingItems).

Your job: plan ONE full day of specific recommendations in and around
tripContext.destination, informed by the pasted text, and return them as STRICT JSON.

Return ONLY valid JSON of this exact shape:
{{"items":[PasteImportItem...]}}

Output rules:
- Do NOT include markdown, comments, or extra keys.
- Use kind: {_KIND_UNION}
- Fill confidence (0..1) with how well the item fits the request.
- sourceSnippet: the part of the pasted text that motivated the item, or "" if none.
- Set dayID to null unless the input clearly names the day.

Preferences:
- If preferences are present, respect them: favoriteFoodCSV (cuisines the user likes),
  drinksAlcohol (if false, no bars, breweries, wine tastings or cocktail venues),
  interestsCSV (themes to favour).
- Do NOT restate the preferences in titles, subtitles or notes.

No duplicates:
- NEVER recommend a venue that already appears in existingItems (compare by title and location).
- NEVER recommend the same venue twice within your own output.

Variety:
- Vary cuisine, meal type, vibe, neighborhood and price level across the day.
- Do not stack several items of the same category back to back.

Locations:
- location must be a specific, geocodable venue string ("Venue Name, Street, City"),
  never a broad area name such as a district or the city itself.

Item counts:
- activity: 5 to 10 items.
- checklist: 0 or 1 item, whose checklistItemsText holds 5 to 12 newline-separated lines.
- reminder: 0 to 3 items.
- flight: 0 to 3 items, only when the pasted text mentions flights; fill
  flightFromCode, flightToCode and flightNumber.

Timing:
- If the input gives explicit times, use them.
- Otherwise use these default windows for startTime/endTime:
  breakfast or coffee 08:00-10:00, morning sights 09:30-12:30, lunch 12:00-14:00,
  afternoon sights or shopping 14:00-17:30, snack or dessert 15:00-17:00,
  dinner 18:30-21:00, nightlife 21:00-23:30.
- Items must not overlap and must appear in chronological order.

Routing:
- Cluster the day geographically; order stops to minimise backtracking.

{ITEM_SCHEMA}
"""


def build_user_message(request: PasteImportRequest, include_preferences: bool = False) -> str:
    """Serialize the caller envelope for the second `contents` part.

    Args:
        request: Parsed caller envelope.
        include_preferences: Adds the `preferences` key when `True`.

    Returns:
        Compact JSON string with keys in fixed order.
    """
    return request.to_user_message(include_preferences=include_preferences)


def build_contents(instruction: str, user_message: str) -> List[Dict[str, Any]]:
    """Build provider `contents`: instruction part, then envelope part."""
    return [
        {"role": "user", "parts": [{"text": instruction}]},
        {"role": "user", "parts": [{"text": user_message}]},
    ]


def build_generation_config(temperature: float) -> Dict[str, Any]:
    """Build `generationConfig` requesting JSON-typed output."""
    return {
        "temperature": temperature,
        "responseMimeType": "application/json",
    }
