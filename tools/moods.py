"""Static mood tables shared by the recommendation tools."""
from typing import Dict, List

DEFAULT_MOOD = "relaxed"
DEFAULT_GENRE = "18"  # Drama

KNOWN_MOODS = [
    "happy", "sad", "excited", "relaxed", "scared", "romantic", "adventurous",
    "thoughtful", "chill", "angry", "peaceful", "inspired", "energetic",
]

# TMDB genre ids; a comma separated value matches any of the listed genres
MOOD_GENRES: Dict[str, str] = {
    "happy": "35",         # Comedy
    "sad": "18",           # Drama
    "excited": "28",       # Action
    "relaxed": "10749",    # Romance
    "scared": "27",        # Horror
    "romantic": "10749",   # Romance
    "adventurous": "12",   # Adventure
    "thoughtful": "18",    # Drama
    "chill": "35,10749",   # Comedy, Romance
    "angry": "28",         # Action
    "peaceful": "36",      # History
    "inspired": "18",      # Drama
    "energetic": "28",     # Action
}

CURATED_RECOMMENDATIONS: Dict[str, List[Dict]] = {
    "happy": [
        {"title": "The Grand Budapest Hotel", "genre": "Comedy",
         "description": "A whimsical caper about a legendary concierge", "matchScore": 95},
        {"title": "Paddington 2", "genre": "Family Comedy",
         "description": "A charming adventure with a beloved bear", "matchScore": 94},
        {"title": "Knives Out", "genre": "Mystery Comedy",
         "description": "A clever and entertaining whodunit", "matchScore": 92},
        {"title": "Amélie", "genre": "Romantic Comedy",
         "description": "A whimsical journey through Paris", "matchScore": 93},
        {"title": "School of Rock", "genre": "Comedy Drama",
         "description": "Inspiring and fun musical comedy", "matchScore": 91},
    ],
    "sad": [
        {"title": "Life is Beautiful", "genre": "Drama",
         "description": "A poignant story of hope and love", "matchScore": 96},
        {"title": "The Shawshank Redemption", "genre": "Drama",
         "description": "A moving tale of friendship and perseverance", "matchScore": 95},
        {"title": "Moonlight", "genre": "Drama",
         "description": "An intimate exploration of identity", "matchScore": 93},
        {"title": "Manchester by the Sea", "genre": "Drama",
         "description": "A tender story about grief and healing", "matchScore": 92},
        {"title": "About Time", "genre": "Drama Romance",
         "description": "A heartfelt film about love and family", "matchScore": 91},
    ],
    "excited": [
        {"title": "Mad Max: Fury Road", "genre": "Action",
         "description": "An adrenaline-pumping post-apocalyptic adventure", "matchScore": 94},
        {"title": "Top Gun: Maverick", "genre": "Action Drama",
         "description": "High-octane aerial thrills", "matchScore": 93},
        {"title": "Inception", "genre": "Sci-Fi Action",
         "description": "Mind-bending action and stunning visuals", "matchScore": 92},
        {"title": "The Dark Knight", "genre": "Action Thriller",
         "description": "Epic superhero action with depth", "matchScore": 93},
        {"title": "Baby Driver", "genre": "Action Crime",
         "description": "Fast-paced action set to great music", "matchScore": 91},
    ],
    "relaxed": [
        {"title": "Spirited Away", "genre": "Animation Fantasy",
         "description": "A serene and magical animated journey", "matchScore": 95},
        {"title": "Midnight in Paris", "genre": "Romance Fantasy",
         "description": "A dreamy romantic escape", "matchScore": 92},
        {"title": "My Neighbor Totoro", "genre": "Animation Family",
         "description": "A peaceful and wholesome animated classic", "matchScore": 94},
        {"title": "Lost in Translation", "genre": "Drama",
         "description": "A quiet and contemplative film", "matchScore": 91},
        {"title": "Garden State", "genre": "Comedy Drama",
         "description": "A laid-back indie gem", "matchScore": 90},
    ],
    "scared": [
        {"title": "The Shining", "genre": "Horror",
         "description": "A psychological horror masterpiece", "matchScore": 95},
        {"title": "Hereditary", "genre": "Horror",
         "description": "A deeply unsettling supernatural thriller", "matchScore": 93},
        {"title": "A Quiet Place", "genre": "Horror Thriller",
         "description": "Tense and terrifying with minimal dialogue", "matchScore": 92},
        {"title": "Get Out", "genre": "Horror Thriller",
         "description": "A smart and shocking thriller", "matchScore": 94},
        {"title": "The Conjuring", "genre": "Horror",
         "description": "A well-crafted haunted house experience", "matchScore": 91},
    ],
}


def normalize_mood(mood: str) -> str:
    return mood.strip().lower()


def curated_for_mood(mood: str) -> List[Dict]:
    """Curated list for mood, falling back to the default mood's list."""
    return CURATED_RECOMMENDATIONS.get(normalize_mood(mood), CURATED_RECOMMENDATIONS[DEFAULT_MOOD])


def genre_for_mood(mood: str) -> str:
    return MOOD_GENRES.get(normalize_mood(mood), DEFAULT_GENRE)
