"""
Example tree builder for docs and tests.

Builds a small ancient-era tree with both AND and OR prerequisites and a
diamond: writing and masonry both lead to education.

    pottery ──> irrigation
            └─> writing ───┐
    mining  ──> masonry ───┴─> education (And)
    bronze_working (Or: pottery, mining)
"""
from techtree.model import Technology
from techtree.prerequisites import And, Or
from techtree.tree import TechnologyTree

EXAMPLE_TEXT = """\
pottery;Pottery;Basic pottery techniques.;And:;5
mining;Mining;Digging for stone and ore.;And:;6
irrigation;Irrigation;Advanced irrigation techniques.;And:pottery;10
writing;Writing;Basics of writing.;And:pottery;8
masonry;Masonry;Building with cut stone.;And:mining;8
education;Education;Schools and scribes.;And:writing,masonry;20
bronze_working;Bronze Working;Casting bronze tools.;Or:pottery,mining;12"""


def build_example_tree() -> TechnologyTree:
    tree = TechnologyTree()

    tree.add(Technology(id="pottery", name="Pottery", description="Basic pottery techniques.", cost=5))
    tree.add(Technology(id="mining", name="Mining", description="Digging for stone and ore.", cost=6))
    tree.add(Technology(
        id="irrigation",
        name="Irrigation",
        description="Advanced irrigation techniques.",
        prerequisite=And(("pottery",)),
        cost=10,
    ))
    tree.add(Technology(
        id="writing",
        name="Writing",
        description="Basics of writing.",
        prerequisite=And(("pottery",)),
        cost=8,
    ))
    tree.add(Technology(
        id="masonry",
        name="Masonry",
        description="Building with cut stone.",
        prerequisite=And(("mining",)),
        cost=8,
    ))
    tree.add(Technology(
        id="education",
        name="Education",
        description="Schools and scribes.",
        prerequisite=And(("writing", "masonry")),
        cost=20,
    ))
    tree.add(Technology(
        id="bronze_working",
        name="Bronze Working",
        description="Casting bronze tools.",
        prerequisite=Or(("pottery", "mining")),
        cost=12,
    ))

    return tree
