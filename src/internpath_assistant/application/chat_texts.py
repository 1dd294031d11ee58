"""Textos do assistente (respostas, dicas e catálogo de cursos).

Centraliza o conteúdo exibido ao usuário para manter o gerador de
respostas e o executor de comandos livres de strings soltas.
"""

from __future__ import annotations

from types import MappingProxyType

from internpath_assistant.domain.conversation import CommandExample, GuidelinesContent
from internpath_assistant.domain.enums import HelpTopic

GUIDELINES = GuidelinesContent(
    title="👋 Welcome to InternPath Assistant!",
    intro=(
        "I am your smart chatbot, designed to help you find internships, improve your "
        "profile, generate resumes, and much more."
    ),
    how_to_use=(
        "Type your question or command in the chat box below.",
        "Use the microphone button to speak your query (if voice mode is enabled).",
        "Click on suggested actions for quick navigation.",
        'Type "help" anytime to see these instructions again.',
    ),
    examples=(
        CommandExample(icon="👤", label="Profile", example="How do I complete my profile?"),
        CommandExample(
            icon="🎯", label="Internships", example="Show me internship recommendations"
        ),
        CommandExample(icon="📄", label="Resume", example="Generate my resume"),
        CommandExample(icon="🔊", label="Voice", example="Enable voice mode"),
        CommandExample(icon="📱", label="SMS", example="Setup SMS alerts"),
        CommandExample(icon="🧭", label="Navigation", example="Go to profile page"),
        CommandExample(icon="❓", label="General Help", example="What can you do?"),
    ),
    tips=(
        "Tip: You can ask me anything related to internships, your profile, or application "
        "process. I'm here to make your journey easier!",
        "Need more help? Just type help or click on any suggested button.",
    ),
)


def guidelines_text(content: GuidelinesContent = GUIDELINES) -> str:
    """Versão texto das instruções (fala e clientes sem conteúdo rico)."""
    lines = [content.title, "", content.intro, "", "How to use me:"]
    lines.extend(f"{i}. {step}" for i, step in enumerate(content.how_to_use, start=1))
    lines.extend(["", "What can I do for you?"])
    lines.extend(f"{ex.icon} {ex.label}: {ex.example}" for ex in content.examples)
    if content.tips:
        lines.append("")
        lines.extend(content.tips)
    return "\n".join(lines)


PROFILE_INCOMPLETE = "I see your profile is incomplete. Let me help you fill it out!"
PROFILE_COMPLETE = (
    "Your profile looks good! Would you like to update anything or get recommendations?"
)
NO_RECOMMENDATIONS = "You don't have recommendations yet. Let me help you generate some!"
RECOMMENDATIONS_AVAILABLE = (
    "You have {count} recommendations! I can explain matches, skill gaps, or help with "
    "applications."
)
SKILL_GAPS_FOUND = "I found {count} skill gaps. I can recommend courses to help you improve!"
NO_SKILL_GAPS = "Great! You don't have any major skill gaps for your current recommendations."
RESUME_HELP = (
    "I can generate a professional resume for you automatically! This makes applying much "
    "easier."
)
RESUME_GENERATED = "Resume generated successfully! Check your downloads."
RESUME_ERROR = "Sorry, there was an error generating your resume. Please try again."
RECOMMENDATIONS_ERROR = (
    "Sorry, I couldn't generate recommendations right now. Please try again."
)
SMS_OFFLINE = "Since you're offline, I can send your top recommendations via SMS!"
SMS_ONLINE = (
    "SMS recommendations are available for offline access. Would you like to set it up for "
    "later?"
)
VOICE_ACTIVE = "Voice mode is currently active! You can speak to me in your preferred language."
VOICE_INACTIVE = "Voice mode is not active. I can help you enable it!"
NAVIGATION_TAKING_YOU = "Taking you to {destination}!"
NAVIGATION_OPTIONS = "Where would you like to go?"
GENERAL_HELP = "Here are the main things I can help you with:"
APPLICATION_HELP = (
    "I can help you with applications! I can generate your resume and explain the process."
)
EXPLAIN_MATCHES_HEADER = "Here's why these internships match you:"
DEFAULT_MATCH_EXPLANATION = "Good match based on your profile"
COURSES_HEADER = "Here are courses to improve your skills:"
NO_COURSES = "No specific courses found, but you can check NPTEL and SWAYAM for relevant skills."

TOPIC_TEXTS: MappingProxyType[HelpTopic, str] = MappingProxyType({
    HelpTopic.PROFILE_TIPS: (
        "Profile tips:\n"
        "• Add your full name and education details.\n"
        "• List at least 3-5 skills you are confident in.\n"
        "• Mention your preferred locations and sectors.\n"
        "• Keep your language preference up to date for better matches."
    ),
    HelpTopic.RESUME_TIPS: (
        "Resume tips:\n"
        "• Keep it to one page.\n"
        "• Put your strongest skills and projects first.\n"
        "• Use action verbs and quantify results where you can.\n"
        "• Tailor it to the internship you are applying for."
    ),
    HelpTopic.VOICE_TIPS: (
        "Voice tips:\n"
        "• Speak clearly and at a normal pace.\n"
        "• Use short commands like \"show recommendations\".\n"
        "• Use the microphone button and wait for the beep before speaking."
    ),
    HelpTopic.VOICE_FEATURES: (
        "With voice mode you can:\n"
        "• Speak your questions instead of typing.\n"
        "• Hear my replies read aloud in your preferred language.\n"
        "• Navigate the app hands-free."
    ),
    HelpTopic.SMS_INFO: (
        "How SMS works:\n"
        "1. Enter and verify your phone number.\n"
        "2. Choose how often and how many recommendations you want.\n"
        "3. Receive your top internship matches by SMS, even without internet."
    ),
    HelpTopic.APPLICATION_PROCESS: (
        "Application process:\n"
        "1. Complete your profile.\n"
        "2. Review your recommendations and skill gaps.\n"
        "3. Generate your resume.\n"
        "4. Apply on the internship page before the deadline.\n"
        "5. Track updates and feedback in the app."
    ),
})

# skill → (curso, provedor)
SKILL_COURSES: MappingProxyType[str, tuple[str, str]] = MappingProxyType({
    "Python": ("Programming, Data Structures and Algorithms using Python", "NPTEL"),
    "JavaScript": ("Modern JavaScript for Beginners", "SWAYAM"),
    "React": ("Front-End Web Development with React", "Coursera"),
    "SQL": ("Introduction to Database Systems", "NPTEL"),
    "Machine Learning": ("Introduction to Machine Learning", "NPTEL"),
    "Data Analysis": ("Data Analytics with Python", "NPTEL"),
    "Excel": ("Excel Skills for Business", "Coursera"),
    "Communication": ("Developing Soft Skills and Personality", "NPTEL"),
    "Java": ("Programming in Java", "NPTEL"),
    "Digital Marketing": ("Fundamentals of Digital Marketing", "SWAYAM"),
})
