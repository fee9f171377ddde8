from typing import List, NamedTuple, Union

from data_store import LocalDataStore
from errors import InvalidInputError
from pydantic_models import DiagnosisRequest

MISSING_INPUT_MESSAGE = "Please provide either selected symptom IDs or text input for diagnosis."
NO_VALID_SYMPTOMS_MESSAGE = "No valid symptom names found for provided IDs. Please check the symptom IDs."

# The bolded headings are read back by response_matcher; keep them verbatim.
PROMPT_TEMPLATE = """
You are an AI medical assistant. A user from New York City {subject}.
Please provide the following information:
1.  **Condition:** The most likely common non-emergency medical condition that fits {fits}. Be concise.
2.  **Description:** A brief, easy-to-understand description of this condition.
3.  **Self-Care:** General self-care advice and home remedies for this condition.
4.  **When to See a Doctor:** Clear guidance on specific situations or worsening symptoms that necessitate consulting a professional healthcare provider or seeking emergency care.
5.  **Important Disclaimer:** A prominent statement clarifying that this information is for general guidance only, **is not a medical diagnosis**, and does not replace professional medical advice.

Format your response with these exact bolded headings. Maintain a supportive, informative, and cautious tone.
"""


class PromptSource(NamedTuple):
    prompt: str
    mode: str  # "chat" | "symptoms"
    inputs: Union[str, List[str]]


def build_chat_prompt(chat_text: str) -> str:
    return PROMPT_TEMPLATE.format(subject=f'says: "{chat_text}"', fits="this description")


def build_symptom_prompt(symptom_names: List[str]) -> str:
    return PROMPT_TEMPLATE.format(
        subject=f"reports the following symptoms: {', '.join(symptom_names)}",
        fits="these symptoms",
    )


def build_prompt(request: DiagnosisRequest, store: LocalDataStore) -> PromptSource:
    """
    Pick the input mode and render the prompt.

    Chat input wins whenever it is non-empty after trimming. Otherwise the
    symptom ids are resolved in order against the store, unknown ids dropped.
    Raises InvalidInputError when neither mode has anything to work with.
    """
    chat_text = (request.chat_input or "").strip()
    if chat_text:
        return PromptSource(build_chat_prompt(chat_text), "chat", chat_text)

    if request.selected_symptom_ids:
        names = [store.symptom_name(sid) for sid in request.selected_symptom_ids]
        names = [n for n in names if n is not None]
        if not names:
            raise InvalidInputError(NO_VALID_SYMPTOMS_MESSAGE)
        return PromptSource(build_symptom_prompt(names), "symptoms", names)

    raise InvalidInputError(MISSING_INPUT_MESSAGE)
