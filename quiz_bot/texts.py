# Commands
START = "/start"
NEW_TEST = "/newtest"
SCORE = "/score"

# Reply keyboard labels
NEW_TEST_BUTTON = "➕ Add a new test"
START_BUTTON = "🚀 Start"
ANSWER_ROWS = [["A", "B"], ["C", "D"]]

GREETING = (
    "👋 Hello! Welcome to the quiz bot.\n\n"
    "📚 Pick one of the subjects below or submit your own test:"
)

SUBMISSION_FORMAT = (
    "📝 Please send the test questions in JSON format.\n\n"
    "Example:\n"
    "```json\n"
    "[\n"
    "  {\n"
    '    "question": "What is the capital of Uzbekistan?",\n'
    '    "options": ["Tashkent", "Samarkand", "Bukhara", "Khiva"],\n'
    '    "correct": "A"\n'
    "  }\n"
    "]\n"
    "```"
)

SUBMISSION_INVALID = (
    "❌ Error! The JSON is malformed or no questions were found. Please try again."
)
SUBMISSION_ACCEPTED = "✅ {count} questions accepted!"

SET_SELECTED = "✅ {name} selected!\n📝 Total questions: {count}"
SET_EMPTY = "⚠️ There are no questions in {name} yet. Pick another subject."

LIMIT_PROMPT = "🔢 How many questions do you want to answer? (enter a number from 1 to {count})"
LIMIT_INVALID = "❌ Please enter a number between 1 and {count}."
READY = "🚀 Ready! {limit} random questions selected.\nShall we begin?"

QUESTION = "📝 Question {number}/{total}\n\n{text}\n\n{options}"
OPTION = "{letter}) {text}"

CORRECT = "✅ Correct!"
WRONG = "❌ Wrong! The correct answer is {letter}"

FINISHED = (
    "🏁 Test finished!\n\n"
    "📊 Result: {score}/{total} ({percent}%)\n\n"
    "Send /start to play again"
)

SCORE_REPORT = (
    "📊 Current result:\n"
    "✅ Correct: {correct}\n"
    "❌ Wrong: {wrong}\n"
    "📝 Answered: {answered} / {total}"
)
NO_ACTIVE_TEST = "⚠️ There is no active test right now."
START_FIRST = "⚠️ Start a test first with the /start command."

COMMAND_DESCRIPTIONS = {
    "start": "🦄 Choose a subject and start over",
    "newtest": "➕ Submit your own test",
    "score": "📊 Show the current score",
}
