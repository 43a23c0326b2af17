# config/analyzer_config.py

ANALYZER_CONFIG = {
    "email_analysis": {
        "model": {
            "name": "gpt-4",
            "temperature": 0.7,
            "max_tokens": 500
        },
        "system_prompt": (
            "You are an email analysis assistant. "
            "Analyze the email content and provide insights."
        ),
        "user_prompt": "Analyze this email:\nSubject: {subject}\nContent: {content}"
    },
    "response_generation": {
        "model": {
            "name": "gpt-4",
            "temperature": 0.7,
            "max_tokens": 1000
        },
        "system_prompt": (
            "You are an email response assistant. "
            "Generate appropriate responses based on the context."
        ),
        "user_prompt": "Generate a response for:\nContext: {summary}\nTone: {tone}"
    },
    "completion_endpoint": {
        "api_endpoint": "https://api.openai.com/v1/chat/completions",
        # Seconds before an unanswered request is abandoned
        "timeout": 30
    }
}
