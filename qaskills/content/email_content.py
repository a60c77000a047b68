import random

welcome_banners = [
    "Welcome to QASkills.sh! 🎉",
    "Your agents are about to get better at testing 🧪",
    "Glad to have you in the QA community 👋",
    "Let's ship fewer bugs together 🐛",
    "Thanks for joining the skills directory ✨",
]

def get_random_welcome_banner() -> str:
    return random.choice(welcome_banners)

digest_banners = [
    "Here are the top QA testing skills from the past week 📊",
    "This week's most installed skills 🚀",
    "Fresh picks for your AI agent's test suite 🧪",
    "What QA engineers installed this week 🔍",
    "Your weekly dose of testing superpowers 💪",
]

def get_random_digest_banner() -> str:
    return random.choice(digest_banners)
