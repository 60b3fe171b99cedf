from __future__ import annotations

from dataclasses import dataclass, field

MANAGER_GREETING = (
    "Hello! I'm your AI assistant. I can help you analyze staffing patterns, predict scheduling needs, "
    "generate reports, and optimize workforce management. How can I assist you today?"
)
EMPLOYEE_GREETING = (
    "Hi! I'm your AI assistant. I can help you manage your schedule, request time off, find shift swaps, "
    "track your hours, and more. What would you like help with?"
)

MANAGER_SUGGESTIONS = (
    "Show me today's staffing analytics",
    "Predict next week's scheduling needs",
    "Find patterns in overtime usage",
    "Generate monthly performance report",
    "Identify attendance trends",
    "Optimize shift assignments",
)
EMPLOYEE_SUGGESTIONS = (
    "Show my upcoming shifts",
    "Request time off next week",
    "Find someone to swap shifts with",
    "Calculate my overtime hours",
    "Check my attendance score",
    "When is my next break due?",
)

_MANAGER_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("analytics", "staffing"),
        "Based on current data:\n\n"
        "Staffing Level: 85% optimal\n"
        "Average Response Time: 4.2 minutes\n"
        "Current Staff: 24/32 active\n"
        "Efficiency Score: 92%\n\n"
        "Key Insights:\n"
        "- Sales is understaffed by 2 employees\n"
        "- Peak hours are 10 AM - 2 PM\n"
        "- Consider adding 1 float staff for flexibility\n\n"
        "Would you like me to generate a detailed report or create an optimized schedule?",
    ),
    (
        ("predict", "next week"),
        "Predictive Analysis for Next Week:\n\n"
        "Predicted Needs:\n"
        "- Monday: 32 staff (high workload expected)\n"
        "- Tuesday-Thursday: 28 staff (normal flow)\n"
        "- Friday: 30 staff (end-of-week surge)\n\n"
        "Risk Areas:\n"
        "- Operations dept may need 2 additional staff\n"
        "- Night shift coverage gap on Wednesday\n\n"
        "Recommendations:\n"
        "1. Schedule 3 on-call staff for Monday\n"
        "2. Arrange shift swap for Wednesday night\n"
        "3. Pre-approve 8 hours overtime budget\n\n"
        "Shall I automatically create shift assignments based on these predictions?",
    ),
    (
        ("overtime",),
        "Overtime Analysis:\n\n"
        "Current Month:\n"
        "- Total: 186 hours ($11,160)\n"
        "- Top User: David Park (28 hours)\n"
        "- Department: Support (45%)\n\n"
        "Trend: +12% from last month\n\n"
        "Recommendations:\n"
        "1. Redistribute Support shifts\n"
        "2. Hire 1 part-time staff member\n"
        "3. Implement rotating on-call system\n\n"
        "Would you like me to create an overtime optimization plan?",
    ),
)
_MANAGER_DEFAULT = (
    "I'll help you with that. Let me analyze the data and provide insights. Meanwhile, you can also try "
    "asking about staffing analytics, scheduling predictions, or performance metrics."
)

_EMPLOYEE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("shift", "schedule"),
        "Your Upcoming Shifts:\n\n"
        "- Today: 8 AM - 4 PM (Sales Floor)\n"
        "- Tomorrow: OFF\n"
        "- Friday: 8 AM - 4 PM (Sales Floor)\n"
        "- Saturday: 12 PM - 8 PM (Support Desk)\n"
        "- Sunday: OFF\n\n"
        "Tip: You have 2 consecutive days off! Perfect for rest and recovery.\n\n"
        "Would you like to request any changes or see available swap options?",
    ),
    (
        ("time off", "request"),
        "I can help you request time off. Based on your schedule:\n\n"
        "Best dates for time off:\n"
        "- Jan 25-27 (low staffing impact)\n"
        "- Feb 3-5 (already covered)\n\n"
        "Avoid requesting:\n"
        "- Jan 30-31 (high demand period)\n\n"
        "I found 3 colleagues who could cover your shifts.\n\n"
        "Would you like me to submit a time-off request for specific dates?",
    ),
    (
        ("overtime", "hours"),
        "Your Hours Summary:\n\n"
        "- This Week: 32.5 hours\n"
        "- Overtime: 4.5 hours\n"
        "- Month Total: 152 regular + 12.5 OT\n"
        "- Earnings: +$750 overtime pay\n\n"
        "You're in the top 20% for attendance!\n\n"
        "Tip: You're eligible for 8 more OT hours this month.\n\n"
        "Want me to find available overtime shifts for you?",
    ),
)
_EMPLOYEE_DEFAULT = (
    "I'm here to help! I can assist with scheduling, time-off requests, shift swaps, hours tracking, "
    "and more. What specific information do you need?"
)


def greeting(role: str) -> str:
    return MANAGER_GREETING if role == "manager" else EMPLOYEE_GREETING


def suggestions(role: str) -> tuple[str, ...]:
    return MANAGER_SUGGESTIONS if role == "manager" else EMPLOYEE_SUGGESTIONS


def get_ai_response(query: str, role: str) -> str:
    """Keyword-matched canned reply; the first matching rule wins."""
    lowered = query.lower()
    rules, fallback = (_MANAGER_RULES, _MANAGER_DEFAULT) if role == "manager" else (_EMPLOYEE_RULES, _EMPLOYEE_DEFAULT)
    for keywords, reply in rules:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return fallback


@dataclass(frozen=True)
class ChatMessage:
    sender: str
    text: str


@dataclass
class ChatTranscript:
    role: str
    messages: list[ChatMessage] = field(default_factory=list)
    show_suggestions: bool = True

    def __post_init__(self) -> None:
        if not self.messages:
            self.messages.append(ChatMessage("ai", greeting(self.role)))

    @property
    def suggestions(self) -> tuple[str, ...]:
        return suggestions(self.role) if self.show_suggestions else ()

    def send(self, text: str) -> ChatMessage | None:
        if not text.strip():
            return None
        reply = ChatMessage("ai", get_ai_response(text, self.role))
        self.messages.extend([ChatMessage("user", text), reply])
        self.show_suggestions = False
        return reply
