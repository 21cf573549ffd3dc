"""
Prompt builders and the declared response schema for the Gemini calls.

All prompts are written in Arabic because the app produces Arabic recipes.
Prompt construction is kept free of I/O so it can be tested directly: the
dietary restrictions chosen by the user must appear verbatim in the prompt.
"""

from typing import List

from google.genai import types

from recipegen.models import DEFAULT_RECIPE_COUNT, Recipe

# Ingredients the model may assume without them being listed
PANTRY_STAPLES = "الملح والفلفل والماء والزيت"

RECIPE_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING, description="عنوان الوصفة باللغة العربية"),
            "description": types.Schema(type=types.Type.STRING, description="وصف قصير للوصفة باللغة العربية"),
            "ingredients": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
                description="قائمة المكونات المطلوبة للوصفة باللغة العربية",
            ),
            "instructions": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
                description="خطوات التحضير بالتفصيل باللغة العربية",
            ),
            "servings": types.Schema(type=types.Type.STRING, description="عدد الأفراد الذين تكفيهم الوصفة"),
            "prepTime": types.Schema(type=types.Type.STRING, description="الوقت اللازم للتحضير"),
            "calories": types.Schema(type=types.Type.STRING, description="تقدير السعرات الحرارية الإجمالية للطبق"),
            "protein": types.Schema(type=types.Type.STRING, description="تقدير كمية البروتين بالجرام"),
            "carbs": types.Schema(type=types.Type.STRING, description="تقدير كمية الكربوهيدرات بالجرام"),
            "fat": types.Schema(type=types.Type.STRING, description="تقدير كمية الدهون بالجرام"),
        },
        required=["title", "description", "ingredients", "instructions", "servings", "prepTime"],
    ),
)


def build_restrictions_sentence(dietary_restrictions: List[str]) -> str:
    """Return the strict-compliance sentence, or an empty string when there are no restrictions."""
    if not dietary_restrictions:
        return ""
    joined = "، ".join(dietary_restrictions)
    return f"يجب أن تلتزم جميع الوصفات بالقيود الغذائية التالية بشكل صارم: {joined}."


def build_recipe_prompt(
    ingredients: List[str],
    dietary_restrictions: List[str],
    count: int = DEFAULT_RECIPE_COUNT,
) -> str:
    """
    Build the recipe-generation prompt.

    Args:
        ingredients: Available ingredients
        dietary_restrictions: Restriction labels, copied verbatim into the prompt
        count: Number of recipes to request

    Returns:
        Prompt string for the text model
    """
    ingredients_text = "، ".join(ingredients)
    restrictions_text = build_restrictions_sentence(dietary_restrictions)

    lines = [
        "أنت طاهٍ خبير وخبير تغذية متخصص في المطبخ العربي.",
        f"مهمتك هي إنشاء {count} وصفات طعام شهية ومبتكرة ومتنوعة باللغة العربية باستخدام قائمة المكونات المقدمة فقط.",
        f"لا تفترض وجود أي مكونات أخرى غير المذكورة (باستثناء {PANTRY_STAPLES}).",
        "",
        f"المكونات المتاحة: {ingredients_text}.",
    ]
    if restrictions_text:
        lines.append(restrictions_text)
    lines.extend([
        "",
        "يرجى تقديم الوصفات بالكامل في شكل مصفوفة JSON فقط دون أي نص إضافي. يجب أن تكون جميع النصوص باللغة العربية الفصحى.",
        "تأكد من أن كل وصفة منطقية ويمكن تحضيرها بالمكونات المتاحة فقط، وأن عنوان كل وصفة مختلف عن الأخرى.",
        "لكل وصفة، قم بتضمين تحليل غذائي تقديري يشمل: السعرات الحرارية، البروتين، الكربوهيدرات، والدهون.",
    ])
    return "\n".join(lines)


def build_image_prompt(recipe_title: str) -> str:
    """Short photographic prompt derived from the recipe title."""
    return (
        f"صورة فوتوغرافية احترافية وواقعية لطبق: {recipe_title}. "
        "يجب أن تبدو الصورة شهية جداً وذات جودة عالية، وبخلفية بسيطة ونظيفة."
    )


def build_variations_prompt(recipe: Recipe) -> str:
    """Prompt asking for 2-3 concise variations of a recipe, in prose."""
    ingredients_text = "، ".join(recipe.ingredients)
    return "\n".join([
        f'بناءً على الوصفة التالية بعنوان "{recipe.title}" ومكوناتها ({ingredients_text})، اقترح 2-3 تنويعات مثيرة للاهتمام.',
        "على سبيل المثال، كيف يمكن جعلها حارة، أو نباتية، أو استخدام مكون رئيسي مختلف.",
        "اجعل الرد موجزًا وواضحًا ومباشرًا باللغة العربية.",
    ])


TRANSCRIPTION_PROMPT = (
    "حوّل التسجيل الصوتي التالي إلى نص عربي مكتوب كما قيل تمامًا. "
    "التسجيل يحتوي على قائمة مكونات طعام. أعد النص فقط دون أي شرح."
)
