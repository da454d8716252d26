def gemini_payload(parts=None, finish_reason="STOP", **extra):
    """Build a generateContent response with a single candidate."""
    candidate = {"finishReason": finish_reason}
    if parts is not None:
        candidate["content"] = {"role": "model", "parts": parts}
    return {"candidates": [candidate], **extra}
