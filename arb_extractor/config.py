
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from arb_extractor.logger import get_logger

logger = get_logger(__name__)

# Filename pattern token replaced by a language code
LANG_TOKEN = "{lang}"

# Reserved key kept as the last entry of every resource file
END_OF_FILE_MARKER_KEY = "@_END_OF_FILE"

DEFAULT_FILE_EXTENSION = ".arb"
DEFAULT_KEY = "myString"
MAX_KEY_LENGTH = 40

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"
API_KEY_ENV_VAR = "GEMINI_API_KEY"

SUPPORTED_PROVIDERS = ["gemini"]

PROVIDER_DEFAULTS = {
    "timeout": 120
}

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "ARB_EXTRACTOR_CONFIG"

# Default prompts
DEFAULT_PROMPTS = {
    "single_translation_prompt": {
        "version": "1.0",
        "description": "Prompt for translating one extracted string",
        "prompt": (
            "Translate the following {source_language_name} text to {target_language_name}. "
            "Return ONLY the translated string, without any introductory text, commentary "
            "or markdown formatting like quotes. "
            "Preserve placeholders like {{variableName}} exactly as they appear in the input. "
            "Input: \"{text}\""
        )
    }
}

# Default configuration template
DEFAULT_CONFIG = {
    "arb_folder_path": "./lib/l10n",
    "source_language": "en",
    "file_name_pattern": "intl_{lang}.arb",
    "prefix": "S.current",
    "auto_translate": True,
    "import_statement": "",
    "post_extraction_command": "",
    "workspace_root": "",
    "ai_provider": "gemini",
    "gemini": {
        "api_key": API_KEY_PLACEHOLDER,
        "models": ["gemini-2.0-flash"],  # First is used
        "timeout": 120,
        "api_url": "https://generativelanguage.googleapis.com/v1beta/models"
    },
    "log_mode": "off",
    "server": {
        "host": "127.0.0.1",
        "port": 5500
    }
}


class ConfigError(Exception):
    """Invalid extractor configuration."""
    pass


@dataclass(frozen=True)
class ExtractorConfig:
    """Configuration resolved once per operation and passed to every component."""
    workspace_root: Path
    arb_folder: Path
    source_language: str
    file_name_pattern: str
    prefix: str
    auto_translate: bool
    ai_provider: str
    api_key: Optional[str]
    model: str
    api_url: str
    timeout: Any
    import_statement: Optional[str] = None
    post_extraction_command: Optional[str] = None

    @property
    def file_extension(self) -> str:
        suffix = Path(self.file_name_pattern).suffix
        return suffix or DEFAULT_FILE_EXTENSION

    @property
    def source_file_name(self) -> str:
        return self.file_name_for(self.source_language)

    @property
    def source_file_path(self) -> Path:
        return self.arb_folder / self.source_file_name

    def file_name_for(self, language_code: str) -> str:
        return self.file_name_pattern.replace(LANG_TOKEN, language_code)

    def file_path_for(self, language_code: str) -> Path:
        return self.arb_folder / self.file_name_for(language_code)

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into a copy of defaults, one level deep for nested sections."""
    merged = json.loads(json.dumps(defaults))
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def get_config_file() -> Path:
    """Config file location, overridable through the environment."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else CONFIG_FILE


def ensure_config_directory(config_file: Optional[Path] = None):
    """Ensure the config directory exists."""
    config_dir = (config_file or get_config_file()).parent
    config_dir.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Config directory ensured: {config_dir}")


def create_default_config(config_file: Optional[Path] = None) -> Path:
    """Create the default config.json file if it does not exist yet."""
    config_file = config_file or get_config_file()
    if config_file.exists():
        return config_file
    ensure_config_directory(config_file)
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {config_file}")
    return config_file


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration file merged over the defaults."""
    config_file = config_file or get_config_file()
    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return _merge(DEFAULT_CONFIG, {})

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {config_file}: {e}")
        logger.warning("Using default configuration")
        return _merge(DEFAULT_CONFIG, {})
    except OSError as e:
        logger.error(f"Failed to read config file {config_file}: {e}")
        logger.warning("Using default configuration")
        return _merge(DEFAULT_CONFIG, {})

    if not isinstance(stored, dict):
        logger.warning(f"Config file {config_file} does not contain an object, using defaults")
        return _merge(DEFAULT_CONFIG, {})

    logger.debug(f"Configuration loaded from {config_file}")
    return _merge(DEFAULT_CONFIG, stored)


def save_config(config: Dict[str, Any], config_file: Optional[Path] = None):
    """Save the configuration to the config file."""
    config_file = config_file or get_config_file()
    try:
        ensure_config_directory(config_file)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save config to {config_file}: {e}")
        raise


def _resolve_api_key(provider_config: Dict[str, Any]) -> Optional[str]:
    api_key = (provider_config.get('api_key') or '').strip()
    if api_key and api_key != API_KEY_PLACEHOLDER:
        return api_key
    env_key = os.environ.get(API_KEY_ENV_VAR, '').strip()
    return env_key or None


def _get_model(provider_config: Dict[str, Any], default_model: str) -> str:
    models = provider_config.get('models', [])
    if models and isinstance(models, list) and models[0]:
        return models[0]
    return provider_config.get('model', default_model)


def resolve_config(
    raw: Optional[Dict[str, Any]] = None,
    workspace_root: Optional[Path] = None,
) -> ExtractorConfig:
    """
    Resolve a configuration dictionary into an ExtractorConfig.

    Args:
        raw: Configuration dictionary (loaded from file when None)
        workspace_root: Workspace root overriding the configured one

    Raises:
        ConfigError: If the filename pattern or source language is invalid
    """
    if raw is None:
        raw = load_config()
    config = _merge(DEFAULT_CONFIG, raw)

    pattern = (config.get('file_name_pattern') or '').strip()
    if pattern.count(LANG_TOKEN) != 1:
        raise ConfigError(
            f"File name pattern '{pattern}' must contain '{LANG_TOKEN}' exactly once"
        )

    source_language = (config.get('source_language') or '').strip()
    if not source_language:
        raise ConfigError("Source language is not configured")

    if workspace_root is None:
        configured_root = config.get('workspace_root') or ''
        workspace_root = Path(configured_root) if configured_root else Path.cwd()
    workspace_root = Path(workspace_root).resolve()

    arb_folder = (workspace_root / (config.get('arb_folder_path') or '.')).resolve()

    provider = config.get('ai_provider') or 'gemini'
    provider_config = config.get(provider, {}) if isinstance(config.get(provider), dict) else {}

    return ExtractorConfig(
        workspace_root=workspace_root,
        arb_folder=arb_folder,
        source_language=source_language,
        file_name_pattern=pattern,
        prefix=config.get('prefix') or DEFAULT_CONFIG['prefix'],
        auto_translate=bool(config.get('auto_translate', True)),
        ai_provider=provider,
        api_key=_resolve_api_key(provider_config),
        model=_get_model(provider_config, DEFAULT_CONFIG['gemini']['models'][0]),
        api_url=provider_config.get('api_url', DEFAULT_CONFIG['gemini']['api_url']),
        timeout=provider_config.get('timeout', PROVIDER_DEFAULTS['timeout']),
        import_statement=(config.get('import_statement') or '').strip() or None,
        post_extraction_command=(config.get('post_extraction_command') or '').strip() or None,
    )


def load_prompts() -> Dict[str, Any]:
    """Load the prompts from default configuration.

    Note: Prompts are hardcoded in the codebase and are not read from the config file.
    """
    return DEFAULT_PROMPTS.copy()


def get_prompt(prompt_name: str = "single_translation_prompt") -> Dict[str, Any]:
    """Get a specific prompt by name."""
    prompts = load_prompts()
    return prompts.get(prompt_name, DEFAULT_PROMPTS["single_translation_prompt"])
