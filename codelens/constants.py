OLLAMA_PROBE_TIMEOUT = 5.0
OLLAMA_GENERATE_TIMEOUT = 120.0
OLLAMA_GENERATE_OPTIONS = {
    "temperature": 0.3,
    "top_p": 0.9,
    "num_predict": 2048,
}

GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"
OLLAMA_DEFAULT_MODEL = "deepseek-r1:8b"

GEMINI_MODELS = {
    "gemini-2.5-pro": {
        "name": "Gemini 2.5 Pro",
        "description": "Advanced model for professional use",
        "cost_per_request": 0.0002,
        "max_tokens": 1048576,
        "supports_streaming": True,
    },
    "gemini-2.5-flash": {
        "name": "Gemini 2.5 Flash",
        "description": "Fast, cost-effective model for most tasks",
        "cost_per_request": 0.0002,
        "max_tokens": 1048576,
        "supports_streaming": True,
    },
    "gemini-2.0-flash": {
        "name": "Gemini 2.0 Flash",
        "description": "Fast, cost-effective model for most tasks",
        "cost_per_request": 0.001,
        "max_tokens": 1048576,
        "supports_streaming": True,
    },
    "gemini-2.0-flash-exp": {
        "name": "Gemini 2.0 Flash Experimental",
        "description": "Latest experimental features",
        "cost_per_request": 0.001,
        "max_tokens": 1048576,
        "supports_streaming": True,
    },
    "gemini-1.5-pro": {
        "name": "Gemini 1.5 Pro",
        "description": "Advanced reasoning for complex tasks",
        "cost_per_request": 0.01,
        "max_tokens": 2097152,
        "supports_streaming": True,
    },
}

# Local models are free; only the installed subset is ever offered.
OLLAMA_MODELS = {
    "deepseek-r1:8b": {
        "name": "Deepseek R1 8B",
        "description": "Open reasoning model, versatile enough for code analysis",
        "cost_per_request": 0.0,
        "max_tokens": 4096,
        "supports_streaming": True,
    },
    "qwen2.5-coder:7b": {
        "name": "Qwen2.5-Coder 7B",
        "description": "Best overall - PHP, JavaScript, React, Vue, Node.js specialist",
        "cost_per_request": 0.0,
        "max_tokens": 32768,
        "supports_streaming": True,
    },
    "deepseek-coder:6.7b": {
        "name": "DeepSeek-Coder 6.7B",
        "description": "Efficient full-stack development with React/Vue expertise",
        "cost_per_request": 0.0,
        "max_tokens": 16384,
        "supports_streaming": True,
    },
    "codellama:7b": {
        "name": "CodeLlama 7B",
        "description": "Security-focused with strong JavaScript support",
        "cost_per_request": 0.0,
        "max_tokens": 16384,
        "supports_streaming": True,
    },
    "codegemma:7b": {
        "name": "CodeGemma 7B",
        "description": "Google-optimized for JavaScript frameworks and PHP",
        "cost_per_request": 0.0,
        "max_tokens": 8192,
        "supports_streaming": True,
    },
}

OPENAI_MODELS = {
    "gpt-4o": {
        "name": "GPT-4o",
        "description": "Flagship multimodal model",
        "cost_per_request": 0.03,
        "max_tokens": 128000,
        "supports_streaming": True,
    },
    "gpt-4o-mini": {
        "name": "GPT-4o mini",
        "description": "Smaller, cheaper GPT-4o variant",
        "cost_per_request": 0.03,
        "max_tokens": 128000,
        "supports_streaming": True,
    },
}

CLAUDE_MODELS = {
    model_id: {
        "name": name,
        "description": "Anthropic Claude model",
        "cost_per_request": 0.03,
        "max_tokens": 128000,
        "supports_streaming": True,
    }
    for model_id, name in [
        ("claude-3-opus-20240229", "Claude 3 Opus"),
        ("claude-3-sonnet-20240229", "Claude 3 Sonnet"),
        ("claude-3-haiku-20240307", "Claude 3 Haiku"),
    ]
}

LMSTUDIO_MODELS = {
    "default": {
        "name": "Default LM Studio Model",
        "description": "Whatever model is loaded in LM Studio",
        "cost_per_request": 0.0,
        "max_tokens": 128000,
        "supports_streaming": True,
    },
}

# Section markers shared by the prompt and the reply parser.
SCORE_MARKER = "CODE QUALITY SCORE:"
SUGGESTIONS_MARKER = "SUGGESTIONS:"
ISSUES_MARKER = "ISSUES FOUND:"
BEST_PRACTICES_MARKER = "BEST PRACTICES:"
SECURITY_MARKER = "SECURITY CONCERNS:"

DEFAULT_FOCUS = "general"
DEFAULT_DETAIL = "standard"

HEURISTIC_BASE_SCORE = 7
HEURISTIC_KEYWORD_WEIGHTS = {
    "sql injection": -2,
    "mass assignment": -1,
    "security": -1,
    "validation": -1,
    "eloquent": 1,
    "middleware": 1,
}
MIN_SCORE = 1
MAX_SCORE = 10

DEFAULT_SUGGESTIONS = [
    "Consider adding proper validation to your inputs",
    "Implement proper error handling and meaningful error responses",
    "Follow the naming conventions and best practices of your language or framework",
]

ANALYSIS_PROMPT = """You are an expert full-stack developer with expertise in PHP/Laravel, JavaScript, React, Vue.js, Node.js, React Native, Python and modern web development.

**INSTRUCTIONS:**
1. First, automatically detect the programming language/framework from the code
2. Apply language-specific best practices and analysis
3. Focus on: {focus}
4. Detail level: {detail}

**CODE TO ANALYZE:**
{code}

**ANALYSIS FORMAT:**

## DETECTED LANGUAGE/FRAMEWORK: [Auto-detected language/framework]

## CODE QUALITY SCORE: [1-10]

## SUGGESTIONS:
- [Language/framework-specific improvements]
- [Performance optimizations]
- [Modern patterns and best practices]

## ISSUES FOUND:
- [Language-specific anti-patterns]
- [Logic and syntax problems]
- [Framework-specific issues]

## BEST PRACTICES:
- [Language/framework conventions]
- [Modern development patterns]
- [Code organization improvements]

## SECURITY CONCERNS:
- [Language-specific vulnerabilities]
- [Framework security issues]
- [Input validation and sanitization]

**LANGUAGE-SPECIFIC GUIDELINES:**

**For PHP/Laravel:**
- Focus on Laravel conventions, Eloquent best practices, security (SQL injection, mass assignment)
- Route optimization, middleware usage, validation patterns

**For React:**
- Hook optimization, component patterns, performance (re-renders, memoization)
- Props validation, accessibility, modern React patterns

**For Vue.js:**
- Composition API vs Options API, reactivity patterns, template optimization
- Component communication, state management, Vue 3 features

**For Node.js:**
- Async/await patterns, error handling, Express.js best practices
- Package security, environment configuration, performance

**For React Native:**
- Mobile-specific patterns, platform differences, performance optimization
- Navigation patterns, state management, native module integration

**For Python:**
- Idiomatic constructs, typing, exception handling, packaging and dependency hygiene

**For JavaScript (general):**
- Modern ES6+ features, browser compatibility, performance
- Code organization, module patterns, error handling

Provide specific, actionable suggestions with code examples when helpful.
"""
