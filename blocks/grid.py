"""Grid block — responsive grid of cards (team, features, stats)."""

from __future__ import annotations

from blocks import schema_builders as s


def _action(default_text: str, default_variant: str) -> dict:
    return s.obj(
        {
            "text": s.string(title="Button Text", default=default_text),
            "href": s.string(title="Button Link", default="#"),
            "variant": s.string(
                title="Button Variant",
                enum=["primary", "secondary", "outline"],
                default=default_variant,
            ),
            "size": s.string(title="Button Size", enum=["sm", "md", "lg"], default="md"),
        }
    )


_CARD = s.obj(
    {
        "id": s.string(title="Card ID", default="card-1"),
        "elements": s.obj(
            {
                "icon": s.obj(
                    {
                        "name": s.string(title="Icon Name", default="UserIcon"),
                        "size": s.string(title="Icon Size", enum=["sm", "md", "lg", "xl"], default="md"),
                    }
                ),
                "avatar": s.obj(
                    {
                        "src": s.string(title="Avatar Image URL", default="https://via.placeholder.com/150"),
                        "alt": s.string(title="Avatar Alt Text", default="Team member"),
                    }
                ),
                "title": s.obj(
                    {
                        "content": s.string(title="Title", default="Card Title"),
                        "level": s.number(title="Heading Level", enum=[1, 2, 3, 4, 5, 6], default=3),
                    }
                ),
                "subtitle": s.obj({"content": s.string(title="Subtitle", default="Card subtitle")}),
                "description": s.obj(
                    {"content": s.string(title="Description", default="Card description text")}
                ),
                "image": s.obj(
                    {
                        "src": s.string(title="Image URL", default="https://via.placeholder.com/300x200"),
                        "alt": s.string(title="Image Alt Text", default="Card image"),
                    }
                ),
                "primaryAction": _action("Learn More", "primary"),
                "secondaryAction": _action("Cancel", "outline"),
            }
        ),
        "layout": s.obj(
            {
                "cardType": s.string(
                    title="Card Type",
                    enum=["profile", "stat", "content", "icon", "custom"],
                    default="custom",
                ),
                "padding": s.string(title="Padding", enum=["none", "sm", "md", "lg", "xl"], default="md"),
                "alignment": s.string(title="Alignment", enum=["left", "center", "right"], default="left"),
            }
        ),
        "background": s.background(),
        "appearance": s.obj(
            {
                "shadow": s.string(title="Shadow", enum=["none", "sm", "md", "lg", "xl"], default="md"),
                "borderRadius": s.string(
                    title="Border Radius",
                    enum=["none", "sm", "md", "lg", "xl", "full"],
                    default="lg",
                ),
                "borderWidth": s.string(
                    title="Border Width",
                    enum=["none", "thin", "medium", "thick"],
                    default="none",
                ),
                "borderColor": s.string(title="Border Color", default="gray-300"),
            }
        ),
    }
)

_GRID_LAYOUT = s.layout()
_GRID_LAYOUT["properties"]["grid"] = s.obj(
    {
        "columns": s.obj(
            {
                "desktop": s.number(title="Desktop Columns", minimum=1, maximum=6, default=3),
                "tablet": s.number(title="Tablet Columns", minimum=1, maximum=4, default=2),
                "mobile": s.number(title="Mobile Columns", minimum=1, maximum=2, default=1),
            },
            title="Column Configuration",
            description="Number of columns per breakpoint",
        ),
        "gap": s.string(title="Grid Gap", enum=["none", "sm", "md", "lg", "xl", "2xl"], default="lg"),
        "alignItems": s.string(
            title="Align Items", enum=["stretch", "start", "center", "end"], default="stretch"
        ),
    },
    title="Grid Settings",
    description="Configure grid layout",
)
_GRID_LAYOUT["title"] = "Layout"
_GRID_LAYOUT["description"] = "Grid and container layout settings"

GRID_SCHEMA = s.BlockSchema(
    id="grid-block",
    title="Grid Block",
    description="A flexible grid layout for cards and content",
    properties={
        "elements": s.obj(
            {
                "sectionTitle": s.obj(
                    {
                        "content": s.string(title="Section Title", default="Our Team"),
                        "level": s.number(title="Heading Level", enum=[1, 2, 3, 4, 5, 6], default=2),
                    },
                    title="Section Title",
                    description="Main heading for the grid section",
                ),
                "sectionSubtitle": s.obj(
                    {
                        "content": s.string(
                            title="Section Subtitle", default="Meet the people behind our success"
                        ),
                    },
                    title="Section Subtitle",
                    description="Supporting text for the section",
                ),
            },
            title="Section Header",
            description="Optional header elements for the grid",
        ),
        "layout": _GRID_LAYOUT,
        "cards": s.array(_CARD, title="Cards", description="Grid items"),
        "background": s.background(),
    },
)


def _profile_card(card_id: str, name: str, role: str, bio: str) -> dict:
    return {
        "id": card_id,
        "elements": {
            "avatar": {"src": "https://via.placeholder.com/150", "alt": "Team member"},
            "title": {"content": name, "level": 3},
            "subtitle": {"content": role},
            "description": {"content": bio},
        },
        "layout": {"cardType": "profile", "padding": "lg", "alignment": "center"},
        "appearance": {"shadow": "md", "borderRadius": "lg"},
    }


GRID_DEFAULT_DATA: dict = {
    "elements": {
        "sectionTitle": {"content": "Our Team", "level": 2},
        "sectionSubtitle": {"content": "Meet the people behind our success"},
    },
    "layout": {
        "blockSettings": {"height": "auto", "margin": {"top": "xl", "bottom": "xl"}},
        "contentSettings": {
            "contentAlignment": {"horizontal": "center", "vertical": "top"},
            "textAlignment": "center",
            "contentWidth": "wide",
            "padding": {"top": "xl", "bottom": "xl", "left": "lg", "right": "lg"},
        },
        "grid": {
            "columns": {"desktop": 3, "tablet": 2, "mobile": 1},
            "gap": "lg",
            "alignItems": "stretch",
        },
    },
    "cards": [
        _profile_card(
            "card-1", "John Doe", "CEO & Founder",
            "Leading our vision with over 15 years of industry experience.",
        ),
        _profile_card(
            "card-2", "Jane Smith", "CTO",
            "Driving innovation and technical excellence across all projects.",
        ),
        _profile_card(
            "card-3", "Mike Johnson", "Head of Design",
            "Creating beautiful and intuitive experiences for our users.",
        ),
    ],
    "background": {"type": "color", "color": "gray", "colorIntensity": "light"},
}

GRID_METADATA: dict = {
    "name": "Grid",
    "description": "A flexible grid layout for displaying cards and content collections",
    "category": "layout",
    "icon": "grid",
    "tags": ["layout", "cards", "collection", "team", "features", "gallery"],
    "version": "1.0.0",
    "author": "I2E System",
    "isAIGenerated": False,
    "hints": {
        "usage": "Use for team members, feature showcases, statistics, or any card-based layouts",
        "performance": "Optimize images in cards and consider lazy loading for large grids",
        "accessibility": "Ensure cards have proper headings and maintain consistent structure",
    },
}

GRID_AI_HINTS: dict = {
    "description": "A responsive grid of cards for teams, features, statistics or galleries.",
    "contentPatterns": [
        "For team grids, map: name→title.content, role→subtitle.content, bio→description.content",
        "NEVER use simplified structures like {name, position, image, bio}",
        "ALWAYS use the nested structure: {id, elements: {title: {content}, subtitle: {content}, ...}}",
        "For avatar images, use src and alt properties (NOT url or image)",
    ],
    "structureGuidelines": [
        "Default to 3 columns on desktop, 2 on tablet, 1 on mobile",
        "Each card MUST have: id, elements (object), layout (object)",
        "ALWAYS include all top-level properties: elements, layout, cards, background",
    ],
    "propertyNotes": {
        "cards": "Array of card objects with EXACT structure: {id, elements, layout, background, appearance}",
        "important": "Do NOT use simplified structures. Each card needs nested objects.",
        "structure": "Response must have: elements (with sectionTitle), layout (with grid settings), cards (array), background",
    },
    "layoutGuidance": {
        "structure": {"recommended": "Section header above a 3/2/1 column responsive card grid"},
    },
}
