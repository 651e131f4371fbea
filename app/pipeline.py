#!/usr/bin/env python3
"""
Validation followed by best-effort generation of Java sources and diagrams.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.errors import ValidationFailedError
from core.uml_model import UmlModel
from core.validator import Diagnostic, ModelValidator
from gen.java.generator import JavaGenerator, SourceUnit
from gen.plantuml.generator import DiagramDocument, PlantUmlGenerator

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    sources: List[SourceUnit] = field(default_factory=list)
    diagrams: List[DiagramDocument] = field(default_factory=list)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)


class GenerationPipeline:
    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def validate(self, model: UmlModel) -> List[Diagnostic]:
        validator = ModelValidator(self.config.report_unresolved_references)
        diagnostics = validator.validate(model)
        for d in diagnostics:
            if d.is_error:
                logger.warning(str(d))
            else:
                logger.debug(str(d))
        if self.config.strict_validation and any(d.is_error for d in diagnostics):
            raise ValidationFailedError(
                f"Model has {sum(1 for d in diagnostics if d.is_error)} validation errors", diagnostics
            )
        return diagnostics

    def generate_sources(self, model: UmlModel, diagnostics: Optional[List[Diagnostic]] = None) -> List[SourceUnit]:
        generator = JavaGenerator(model, self.config)
        units: List[SourceUnit] = []
        for t in model.iter_types():
            if not generator.generates(t):
                continue
            try:
                unit = generator.generate_type(t)
            except Exception as e:
                logger.exception(f"Java generation failed for '{t.name}'")
                if diagnostics is not None:
                    diagnostics.append(Diagnostic("error", f"Code generation failed: {e}", t))
                continue
            if unit is not None:
                units.append(unit)
        logger.info(f"Generated {len(units)} Java compilation units")
        return units

    def generate_diagrams(self, model: UmlModel, diagnostics: Optional[List[Diagnostic]] = None) -> List[DiagramDocument]:
        generator = PlantUmlGenerator(model, self.config)
        documents: List[DiagramDocument] = []
        for pkg in model.iter_packages():
            try:
                doc = generator.generate_package(pkg)
            except Exception as e:
                logger.exception(f"Diagram generation failed for package '{pkg.name}'")
                if diagnostics is not None:
                    diagnostics.append(Diagnostic("error", f"Diagram generation failed: {e}", pkg))
                continue
            if doc is not None:
                documents.append(doc)
        logger.info(f"Generated {len(documents)} diagram documents")
        return documents

    def run(self, model: UmlModel) -> GenerationResult:
        logger.info(f"Generating project '{self.config.project_name}'")
        diagnostics = self.validate(model)
        result = GenerationResult(diagnostics=diagnostics)
        result.sources = self.generate_sources(model, result.diagnostics)
        result.diagrams = self.generate_diagrams(model, result.diagnostics)
        logger.info(
            f"Done: {len(result.sources)} sources, {len(result.diagrams)} diagrams, "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result


def generate(model: UmlModel, config: Optional[GeneratorConfig] = None) -> GenerationResult:
    return GenerationPipeline(config).run(model)


__all__ = ["GenerationResult", "GenerationPipeline", "generate"]
