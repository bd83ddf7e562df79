"""
Built-in question bank: the open learning set and the fixed evaluation set.

Dict order is the lookup order used by the phrase bank.
"""

FALLBACK_RESPONSE = "I'm not sure how to respond to that question."

LEARNING_PHRASES = {
    "How are you today?": (
        "I am fine, thank you. How about you?",
        "I'm doing well, thanks. And you?",
        "I'm good, thank you. How are you?",
        "I'm fine, thanks for asking. How about yourself?",
        "I'm great, thank you. And yourself?",
    ),
    "What is your favorite hobby?": (
        "My favorite hobby is reading books.",
        "I enjoy playing tennis in my free time.",
        "I like to paint and draw.",
        "I love hiking and exploring nature.",
        "I'm passionate about photography.",
    ),
    "Where do you live?": (
        "I live in New York City.",
        "I'm from London, England.",
        "I currently live in Paris, France.",
        "I reside in Tokyo, Japan.",
        "I'm based in Sydney, Australia.",
    ),
    "What did you do yesterday?": (
        "Yesterday, I went to the cinema with my friends.",
        "I worked on a project at home yesterday.",
        "I visited my family yesterday.",
        "Yesterday, I read a book and relaxed at home.",
        "I went shopping at the mall yesterday.",
    ),
    "What are your plans for tomorrow?": (
        "Tomorrow, I plan to go to the gym.",
        "I'm going to meet my friends for lunch tomorrow.",
        "I have a meeting at work tomorrow.",
        "Tomorrow, I'll be studying for my exam.",
        "I'm planning to visit the museum tomorrow.",
    ),
}

EVALUATION_PHRASES = {
    "How are you today?": (
        "I am fine, thank you.",
        "I'm doing well, thanks.",
        "I'm good, thank you.",
        "I'm fine, thanks for asking.",
        "I'm great, thank you.",
    ),
    "What is your name?": (
        "My name is [Name].",
        "I'm [Name].",
        "I am [Name].",
        "My name's [Name].",
        "They call me [Name].",
    ),
    "Where do you live?": (
        "I live in [City/Country].",
        "I'm from [City/Country].",
        "I currently live in [City/Country].",
        "I reside in [City/Country].",
        "I'm based in [City/Country].",
    ),
    "What do you do for a living?": (
        "I work as a [Profession].",
        "I'm a [Profession].",
        "I am employed as a [Profession].",
        "I work in [Industry] as a [Role].",
        "My job is [Job Description].",
    ),
    "What are your hobbies?": (
        "My hobbies include [Hobby1] and [Hobby2].",
        "I enjoy [Hobby] in my free time.",
        "I like to [Activity].",
        "I love [Activity] and [Activity].",
        "I'm passionate about [Interest].",
    ),
    "What did you do yesterday?": (
        "Yesterday, I [Activity].",
        "I [Activity] yesterday.",
        "I spent yesterday [Activity].",
        "Yesterday, I was busy with [Activity].",
        "I was [Activity] yesterday.",
    ),
    "What are your plans for tomorrow?": (
        "Tomorrow, I plan to [Activity].",
        "I'm going to [Activity] tomorrow.",
        "I have [Event] tomorrow.",
        "Tomorrow, I'll be [Activity].",
        "I'm planning to [Activity] tomorrow.",
    ),
    "Can you describe your family?": (
        "My family consists of [Family Members].",
        "I have [Family Description].",
        "My family includes [Family Members].",
        "There are [Number] people in my family: [List].",
        "I live with [Family Members].",
    ),
    "What is your favorite food?": (
        "My favorite food is [Food].",
        "I love eating [Food].",
        "I enjoy [Food] the most.",
        "I'm particularly fond of [Food].",
        "I really like [Food].",
    ),
    "What kind of music do you like?": (
        "I like [Music Genre] music.",
        "I enjoy listening to [Music Genre].",
        "My favorite type of music is [Music Genre].",
        "I'm a fan of [Music Genre] and [Music Genre].",
        "I prefer [Music Genre] over other genres.",
    ),
}
