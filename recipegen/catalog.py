"""
Static catalogs for ingredient and preference capture.

- DIETARY_RESTRICTIONS: the fixed multi-select catalog (id + Arabic label)
- INGREDIENT_CATEGORIES: a browsable ingredient catalog grouped by category
- filter_catalog(): case-insensitive search over the ingredient catalog
- split_transcript(): turns a dictated sentence into ingredient tokens
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DietaryRestriction:
    """
    A selectable dietary restriction.

    Attributes:
        id: Stable identifier (e.g., "vegetarian")
        label: Arabic label, sent verbatim to the model
    """
    id: str
    label: str


DIETARY_RESTRICTIONS: List[DietaryRestriction] = [
    DietaryRestriction("vegetarian", "نباتي"),
    DietaryRestriction("vegan", "نباتي صرف (فيجن)"),
    DietaryRestriction("gluten-free", "خالي من الغلوتين"),
    DietaryRestriction("dairy-free", "خالي من الألبان"),
    DietaryRestriction("low-carb", "قليل الكربوهيدرات"),
]

INGREDIENT_CATEGORIES: Dict[str, List[str]] = {
    "خضروات": ["طماطم", "بصل", "ثوم", "بطاطس", "جزر", "فلفل حلو", "خيار", "باذنجان", "كوسة", "سبانخ", "بروكلي", "فطر", "خس", "ذرة"],
    "فواكه": ["ليمون", "تفاح", "موز", "برتقال", "أفوكادو", "مانجو", "زيتون", "تمر"],
    "لحوم ودواجن": ["صدر دجاج", "لحم بقري مفروم", "فخذ دجاج", "ستيك لحم", "نقانق", "دجاج كامل", "لحم غنم"],
    "أسماك ومأكولات بحرية": ["سمك فيليه", "جمبري", "سلمون", "تونة معلبة"],
    "بقوليات وحبوب": ["أرز", "عدس", "حمص", "فاصوليا", "معكرونة", "برغل", "كينوا", "شوفان", "خبز"],
    "منتجات الألبان والبيض": ["بيض", "حليب", "جبن شيدر", "جبن موزاريلا", "زبادي", "زبدة", "قشطة", "لبنة"],
    "بهارات وتوابل": ["ملح", "فلفل أسود", "كمون", "كزبرة", "كركم", "بابريكا", "قرفة", "زعتر", "ورق غار", "فلفل حار", "زنجبيل", "هيل"],
    "معلبات وصلصات": ["معجون طماطم", "كاتشب", "مايونيز", "خردل", "صلصة الصويا", "مرقة دجاج", "خل"],
    "مكسرات وزيوت": ["زيت زيتون", "زيت نباتي", "لوز", "جوز", "طحينة", "سمسم"],
}

# " و " (Arabic "and" as a separate word), " and ", Latin and Arabic commas
TRANSCRIPT_DELIMITERS = re.compile(r"\s+و\s+|\s+and\s+|[,،]", flags=re.IGNORECASE)


def get_restriction_by_id(restriction_id: str) -> Optional[DietaryRestriction]:
    """Look up a restriction by id, or None if it is not in the catalog."""
    for restriction in DIETARY_RESTRICTIONS:
        if restriction.id == restriction_id:
            return restriction
    return None


def get_restriction_by_label(label: str) -> Optional[DietaryRestriction]:
    """Look up a restriction by its Arabic label."""
    for restriction in DIETARY_RESTRICTIONS:
        if restriction.label == label:
            return restriction
    return None


def filter_catalog(search_term: str = "") -> List[Tuple[str, List[str]]]:
    """
    Filter the ingredient catalog by a search term.

    Matching is a case-insensitive substring test. Categories with no matching
    items are dropped; category and item order are preserved.

    Examples:
        >>> filter_catalog("دجاج")[0]
        ('لحوم ودواجن', ['صدر دجاج', 'فخذ دجاج', 'دجاج كامل'])
    """
    term = (search_term or "").strip().lower()
    result: List[Tuple[str, List[str]]] = []
    for category, items in INGREDIENT_CATEGORIES.items():
        matched = [item for item in items if term in item.lower()]
        if matched:
            result.append((category, matched))
    return result


def split_transcript(transcript: str) -> List[str]:
    """
    Split a dictated ingredient list into trimmed, non-empty tokens.

    Examples:
        >>> split_transcript("دجاج و أرز، طماطم")
        ['دجاج', 'أرز', 'طماطم']
    """
    if not transcript:
        return []
    tokens = TRANSCRIPT_DELIMITERS.split(transcript)
    return [token.strip() for token in tokens if token and token.strip()]
