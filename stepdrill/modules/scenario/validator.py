from typing import Any, Dict, List
from pydantic import BaseModel, ValidationError
import yaml

from ..step.config import build_validation_error_message
from ..step.errors import ConfigError


class ScenarioConfig(BaseModel):
    plan: List[Dict[str, Any]]
    variables: Dict[str, Any] = {}


class ScenarioYamlValidator:
    """Validates YAML content and creates ScenarioConfig instances."""

    @classmethod
    def validate_and_load(cls, yaml_content: str) -> ScenarioConfig:
        """
        Validate YAML content and create a ScenarioConfig instance.
        
        Args:
            yaml_content: The YAML content to validate
            
        Returns:
            ScenarioConfig: The validated scenario configuration
            
        Raises:
            ConfigError: If the YAML content is invalid
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format: {str(e)}")

        try:
            return ScenarioConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(build_validation_error_message(e.errors()))
