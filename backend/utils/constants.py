"""
Static domain tables for taste expansion.

Covers the Qloo entity-type mapping, per-domain default images and
challenge reasons, the curated fallback seeds used when Qloo is unusable,
the progressive-path templates and the five-day plan rotation.
"""

SUPPORTED_DOMAINS = ["film", "music", "books", "food", "fashion"]

DEFAULT_DOMAIN = "film"

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
NEUTRAL_DIFFICULTY = 3

ENTITY_TYPE_MAP = {
    "film": "urn:entity:movie",
    "music": "urn:entity:artist",
    "books": "urn:entity:book",
    "food": "urn:entity:brand",
    "fashion": "urn:entity:brand",
}

DEFAULT_ENTITY_TYPE = "urn:entity:movie"

DEFAULT_IMAGES = {
    "film": "https://images.unsplash.com/photo-1489599651372-014db5c0d3d2?w=400",
    "music": "https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f?w=400",
    "books": "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?w=400",
    "food": "https://images.unsplash.com/photo-1565299624946-b28f40a0ca4b?w=400",
    "fashion": "https://images.unsplash.com/photo-1445205170230-053b83016050?w=400",
}

DOMAIN_REASONS = {
    "film": (
        "Based on your viewing preferences, this film will challenge your "
        "narrative expectations while maintaining visual appeal."
    ),
    "music": (
        "This musical selection expands your sonic palette by introducing new "
        "rhythmic and harmonic elements."
    ),
    "books": (
        "This literary work bridges familiar themes with new storytelling "
        "approaches to broaden your reading horizons."
    ),
    "food": (
        "This culinary experience introduces new flavors and textures that "
        "complement your existing taste preferences."
    ),
    "fashion": (
        "This style choice pushes your aesthetic boundaries while remaining "
        "wearable and expressive."
    ),
}

GENERIC_REASON = (
    "This recommendation is designed to expand your cultural comfort zone "
    "in meaningful ways."
)

# Three curated (title, description, cultural_context) seeds per domain.
FALLBACK_SEEDS = {
    "film": [
        {
            "title": "The Tree of Life",
            "description": "Terrence Malick's experimental meditation on existence",
            "cultural_context": "American experimental cinema",
        },
        {
            "title": "Persona",
            "description": "Ingmar Bergman's psychological masterpiece",
            "cultural_context": "Swedish art cinema",
        },
        {
            "title": "Chungking Express",
            "description": "Wong Kar-wai's vibrant Hong Kong romance",
            "cultural_context": "Hong Kong New Wave",
        },
    ],
    "music": [
        {
            "title": "Aphex Twin - Selected Ambient Works",
            "description": "Pioneering electronic ambient compositions",
            "cultural_context": "British electronic avant-garde",
        },
        {
            "title": "Godspeed You! Black Emperor - F#A#∞",
            "description": "Post-rock orchestral soundscapes",
            "cultural_context": "Canadian post-rock movement",
        },
        {
            "title": "Alice Coltrane - Journey in Satchidananda",
            "description": "Spiritual jazz with Eastern influences",
            "cultural_context": "American spiritual jazz",
        },
    ],
    "books": [
        {
            "title": "If on a winter's night a traveler",
            "description": "Italo Calvino's metafictional masterpiece",
            "cultural_context": "Italian postmodern literature",
        },
        {
            "title": "The Left Hand of Darkness",
            "description": "Ursula K. Le Guin's gender-bending sci-fi",
            "cultural_context": "American speculative fiction",
        },
        {
            "title": "Blindness",
            "description": "José Saramago's allegorical novel",
            "cultural_context": "Portuguese magical realism",
        },
    ],
    "food": [
        {
            "title": "Natto (Fermented Soybeans)",
            "description": "Traditional Japanese breakfast with unique texture",
            "cultural_context": "Japanese traditional cuisine",
        },
        {
            "title": "Durian Fruit",
            "description": "Southeast Asian fruit with complex flavor profile",
            "cultural_context": "Southeast Asian tropical cuisine",
        },
        {
            "title": "Hákarl (Fermented Shark)",
            "description": "Traditional Icelandic delicacy",
            "cultural_context": "Nordic preservation traditions",
        },
    ],
    "fashion": [
        {
            "title": "Avant-Garde Asymmetrical Jacket",
            "description": "Rei Kawakubo-inspired deconstructed silhouette",
            "cultural_context": "Japanese conceptual fashion",
        },
        {
            "title": "Traditional Hanbok with Modern Twist",
            "description": "Korean traditional dress reimagined for contemporary wear",
            "cultural_context": "Korean fashion fusion",
        },
        {
            "title": "Sustainable Hemp Clothing",
            "description": "Eco-conscious fashion with natural textures",
            "cultural_context": "Sustainable fashion movement",
        },
    ],
}

# Intermediate bridges (steps 2 and 3) of the progressive-path template.
# Step 1 is the user's current taste and step 4 the target taste.
PATH_BRIDGES = {
    "film": [
        ("Critically Acclaimed Blockbusters", "Popular films with deeper themes"),
        ("International Cinema", "Foreign films with subtitles"),
    ],
    "music": [
        ("Genre Fusion", "Blends of familiar and new styles"),
        ("Instrumental Exploration", "Focus on composition over vocals"),
    ],
    "books": [
        ("Literary Fiction", "Character-driven narratives"),
        ("Experimental Narratives", "Unconventional storytelling"),
    ],
    "food": [
        ("Fusion Cuisine", "Familiar flavors with new techniques"),
        ("Regional Specialties", "Authentic cultural dishes"),
    ],
    "fashion": [
        ("Contemporary Trends", "Modern interpretations of classic styles"),
        ("Cultural Fashion", "Traditional garments from other cultures"),
    ],
}

PATH_ENDPOINTS = {
    "film": (
        "Your comfort zone - familiar and enjoyable",
        "Your growth target - challenging but rewarding",
    ),
    "music": (
        "Your current musical preferences",
        "Advanced musical complexity",
    ),
    "books": (
        "Your preferred reading style",
        "Complex literary works",
    ),
    "food": (
        "Your culinary comfort zone",
        "Challenging flavor profiles",
    ),
    "fashion": (
        "Your current style preferences",
        "Avant-garde and experimental fashion",
    ),
}

PLAN_THEMES = [
    "Foundation Building",
    "Comfort Zone Expansion",
    "Cultural Bridge",
    "Deep Dive",
    "Integration & Reflection",
]

PLAN_DAYS = 5

PLAN_TIME_COMMITMENT = "30-60 minutes"

# PostgREST error code for ".single()" reads that matched no row
POSTGREST_NOT_FOUND_CODE = "PGRST116"
