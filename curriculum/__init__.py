"""
curriculum - structured résumé to LaTeX generation

Turns a JSON or YAML résumé description into a moderncv LaTeX document,
optionally compiled to PDF.

Architecture:
- Timeline Context: entry tree, durations and skill aggregation
- Intake Context: input loading and schema validation
- Templating Context: LaTeX generation from the entry tree
- Rendering Context: PDF compilation with an external LaTeX engine
"""

__version__ = "0.1.0"
