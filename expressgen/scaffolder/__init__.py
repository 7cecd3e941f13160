"""expressgen scaffolder -- composes and writes an Express project.

Quick usage::

    from expressgen.config import FeatureSelection
    from expressgen.scaffolder import TemplateComposer

    selection = FeatureSelection.from_answers({"language": "JavaScript"})
    for artifact in TemplateComposer(selection).compose():
        print(artifact.relative_path)
"""

from expressgen.scaffolder.composer import TemplateComposer
from expressgen.scaffolder.directories import DirectoryBuilder
from expressgen.scaffolder.docker_gen import DockerGenerator
from expressgen.scaffolder.manifest import ManifestMerger, load_manifest
from expressgen.scaffolder.models import Artifact
from expressgen.scaffolder.templates import TemplateRenderer
from expressgen.scaffolder.writer import FileWriter

__all__ = [
    "Artifact",
    "DirectoryBuilder",
    "DockerGenerator",
    "FileWriter",
    "ManifestMerger",
    "TemplateComposer",
    "TemplateRenderer",
    "load_manifest",
]
