"""Hero block — headline, subtitle and call-to-action at the top of a page."""

from __future__ import annotations

from blocks import schema_builders as s

HERO_SCHEMA = s.BlockSchema(
    id="hero-block",
    title="Hero Block",
    description="A hero section with title, subtitle, and call-to-action",
    properties={
        "elements": s.obj(
            {
                "title": s.obj(
                    {
                        "content": s.string(title="Title Content", default="Welcome to Our Platform"),
                        "level": s.number(
                            title="Heading Level",
                            description="HTML heading level (1-6)",
                            enum=[1, 2, 3, 4, 5, 6],
                            default=1,
                        ),
                    },
                    title="Title",
                    description="Main hero heading",
                ),
                "subtitle": s.obj(
                    {
                        "content": s.string(
                            title="Subtitle Content", default="Build something amazing today"
                        ),
                    },
                    title="Subtitle",
                    description="Supporting text below title",
                ),
                "button": s.obj(
                    {
                        "text": s.string(title="Button Text", default="Get Started"),
                        "href": s.string(title="Button Link", default="/get-started"),
                        "variant": s.string(
                            title="Button Style",
                            enum=["primary", "secondary", "outline"],
                            default="primary",
                        ),
                        "size": s.string(title="Button Size", enum=["sm", "md", "lg"], default="lg"),
                    },
                    title="Call to Action Button",
                    description="Optional CTA button",
                ),
            },
            title="Content Elements",
            description="Hero content configuration",
        ),
        "layout": s.layout(),
        "background": s.background(),
    },
    required=["elements"],
)

HERO_DEFAULT_DATA: dict = {
    "elements": {
        "title": {"content": "", "level": 1},
        "subtitle": {"content": ""},
        "button": {"text": "", "href": "#", "variant": "primary", "size": "lg"},
    },
    "layout": {
        "blockSettings": {
            "height": "screen",
            "margin": {"top": "lg", "bottom": "lg"},
        },
        "contentSettings": {
            "contentAlignment": {"horizontal": "center", "vertical": "center"},
            "textAlignment": "center",
            "contentWidth": "wide",
            "padding": {"top": "2xl", "bottom": "2xl"},
        },
    },
    "background": {"type": "color", "color": "blue", "colorIntensity": "medium"},
}

HERO_METADATA: dict = {
    "name": "Hero Section",
    "description": "Large banner section with title, subtitle, and call-to-action button",
    "category": "marketing",
    "icon": "layout",
    "tags": ["hero", "banner", "landing", "marketing", "cta"],
    "version": "1.0.0",
    "author": "I2E System",
    "isAIGenerated": False,
    "hints": {
        "usage": "Best used as the first section of a landing page or homepage",
        "performance": "Optimize images for web and consider lazy loading for background videos",
        "accessibility": "Ensure sufficient color contrast and provide alt text for background images",
    },
}

HERO_AI_HINTS: dict = {
    "description": (
        "A hero section is the prominent area at the top of a webpage that captures "
        "visitor attention and communicates the main value proposition. It typically "
        "includes a compelling headline, supporting text, and a call-to-action button."
    ),
    "usageContext": {
        "purpose": "First impression and conversion optimization",
        "placement": "Top of landing pages, homepages, or product pages",
        "goals": ["Capture attention", "Communicate value proposition", "Drive conversions"],
    },
    "contentHints": {
        "headline": {
            "characteristics": ["Clear", "Benefit-focused", "Emotional", "Concise"],
            "lengthGuideline": "3-8 words for maximum impact",
        },
        "subheadline": {
            "characteristics": ["Explanatory", "Supportive", "Detailed", "Persuasive"],
            "lengthGuideline": "10-20 words to provide context without overwhelming",
        },
        "ctaButton": {
            "characteristics": ["Action-oriented", "Urgent", "Clear", "Benefit-focused"],
            "lengthGuideline": "1-3 words for buttons",
        },
    },
    "layoutGuidance": {
        "structure": {
            "recommended": "Centered vertical layout with clear hierarchy",
            "alternatives": ["Left-aligned with right image", "Split-screen layout"],
        },
        "typography": {
            "hierarchy": {
                "headline": "Largest, boldest text (h1, 2xl-6xl)",
                "subheadline": "Medium size, regular weight (p, lg-xl)",
                "button": "Medium size, semi-bold (lg-xl)",
            }
        },
    },
}

# Exact output shape used by the create prompt; keeps hero generation on
# a fixed template instead of a schema walk.
HERO_PROMPT_TEMPLATE = """{
  "elements": {
    "title": { "content": "[Generated title based on context]", "level": 1 },
    "subtitle": { "content": "[Generated subtitle based on context]" },
    "button": { "text": "[Action]", "href": "/[path]", "variant": "primary", "size": "lg" }
  },
  "layout": {
    "blockSettings": { "height": "screen", "margin": { "top": "lg", "bottom": "lg" } },
    "contentSettings": {
      "contentAlignment": { "horizontal": "center", "vertical": "center" },
      "textAlignment": "center",
      "contentWidth": "wide",
      "padding": { "top": "2xl", "bottom": "2xl" }
    }
  },
  "background": { "type": "color", "color": "blue", "colorIntensity": "medium" }
}"""
