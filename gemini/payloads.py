"""Request bodies and endpoint URLs for the Vertex AI Gemini API"""

from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from generation.models import GenerationParameters

API_STYLES = {
    "generateContent": "generateContent",
    "predict": "predict",
}


def build_endpoint_url(project: str, location: str, model: str, api_style: str = "generateContent") -> str:
    """Regional model endpoint for a project

    Args:
        project: Google Cloud project id
        location: Region, e.g. us-central1
        model: Publisher model id, e.g. gemini-2.0-flash-001
        api_style: "generateContent" or the legacy "predict"
    """
    method = API_STYLES.get(api_style, "generateContent")
    host = f"https://{location}-aiplatform.googleapis.com"
    return (
        f"{host}/v1/projects/{project}/locations/{location}"
        f"/publishers/google/models/{model}:{method}"
    )


def build_request_body(prompt: str, parameters: "GenerationParameters", api_style: str = "generateContent") -> Dict[str, Any]:
    """JSON body carrying one user prompt and its sampling parameters"""
    if api_style == "predict":
        return {
            "instances": [{"content": prompt}],
            "parameters": parameters.to_generation_config(),
        }

    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ],
        "generationConfig": parameters.to_generation_config(),
    }
