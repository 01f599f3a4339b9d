"""Library use — resolve a template chain and render a new note.

``meeting`` extends ``base``, drops the inherited ``author`` and adds its
own tags on top of the inherited ones.
"""

from pathlib import Path

from langchain_templatekit import TemplateApplicator, TemplateLoader

TEMPLATES = Path(__file__).parent / "Templates"

applicator = TemplateApplicator(TemplateLoader(TEMPLATES))

if __name__ == "__main__":
    document = applicator.resolve("meeting")
    print("chain:", " -> ".join(document.chain))
    print("metadata:", document.metadata)
    print()
    print(applicator.render("meeting", title="Weekly sync"))
