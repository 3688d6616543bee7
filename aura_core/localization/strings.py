"""Display strings per language code.

Every table must define the same keys; see REQUIRED_KEYS.
"""

from typing import Dict, Mapping

REQUIRED_KEYS = frozenset({
    "title",
    "subtitle",
    "greeting",
    "thinking",
    "input_placeholder",
    "fallback",
    "exercise_notice",
    "exercise_fallback",
    "journal_label",
    "journal_fallback",
})

EN: Mapping[str, str] = {
    "title": "Aura",
    "subtitle": "Your Supportive AI Companion",
    "greeting": (
        "Hello! I'm Aura, your supportive AI companion. I'm here to listen without judgment. "
        "Please remember, I am not a licensed therapist. If you are in a crisis, "
        "please seek professional help immediately."
    ),
    "thinking": "Aura is thinking...",
    "input_placeholder": "Type your message...",
    "fallback": "I'm having a little trouble connecting right now. Please try again in a moment.",
    "exercise_notice": "Requesting a guided breathing exercise...",
    "exercise_fallback": (
        "I couldn't load a breathing exercise right now. Try this: breathe in for 4 seconds, "
        "hold for 4, and breathe out slowly for 6."
    ),
    "journal_label": "Journal entry",
    "journal_fallback": (
        "Thank you for sharing this. I couldn't reflect on it right now, "
        "but your words matter. Please try again in a moment."
    ),
}

ES: Mapping[str, str] = {
    "title": "Aura",
    "subtitle": "Tu compañera de apoyo con IA",
    "greeting": (
        "¡Hola! Soy Aura, tu compañera de apoyo con IA. Estoy aquí para escucharte sin juzgarte. "
        "Recuerda que no soy una terapeuta con licencia. Si estás en una crisis, "
        "busca ayuda profesional de inmediato."
    ),
    "thinking": "Aura está pensando...",
    "input_placeholder": "Escribe tu mensaje...",
    "fallback": "Estoy teniendo problemas para conectarme ahora mismo. Inténtalo de nuevo en un momento.",
    "exercise_notice": "Solicitando un ejercicio de respiración guiado...",
    "exercise_fallback": (
        "No pude cargar un ejercicio de respiración ahora. Prueba esto: inhala durante 4 segundos, "
        "mantén 4 y exhala lentamente durante 6."
    ),
    "journal_label": "Entrada del diario",
    "journal_fallback": (
        "Gracias por compartir esto. No pude reflexionar sobre ello ahora, "
        "pero tus palabras importan. Inténtalo de nuevo en un momento."
    ),
}

FR: Mapping[str, str] = {
    "title": "Aura",
    "subtitle": "Votre compagne de soutien IA",
    "greeting": (
        "Bonjour ! Je suis Aura, votre compagne de soutien IA. Je suis là pour vous écouter sans jugement. "
        "N'oubliez pas que je ne suis pas une thérapeute agréée. Si vous êtes en crise, "
        "demandez immédiatement l'aide d'un professionnel."
    ),
    "thinking": "Aura réfléchit...",
    "input_placeholder": "Écrivez votre message...",
    "fallback": "J'ai un peu de mal à me connecter pour le moment. Veuillez réessayer dans un instant.",
    "exercise_notice": "Demande d'un exercice de respiration guidé...",
    "exercise_fallback": (
        "Je n'ai pas pu charger d'exercice de respiration. Essayez ceci : inspirez pendant 4 secondes, "
        "retenez 4 secondes, puis expirez lentement pendant 6."
    ),
    "journal_label": "Entrée de journal",
    "journal_fallback": (
        "Merci de partager cela. Je n'ai pas pu y réfléchir pour le moment, "
        "mais vos mots comptent. Veuillez réessayer dans un instant."
    ),
}

STRINGS: Dict[str, Mapping[str, str]] = {
    "en": EN,
    "es": ES,
    "fr": FR,
}
