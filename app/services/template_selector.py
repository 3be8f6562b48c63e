"""
Keyword/action routed response templates used when the LLM is unavailable.

Rules are evaluated in order and the first match wins. A rule matches when its
action is unset or equals the request action, and when it has no keywords or
one of its keywords occurs in the lower-cased message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from app.schemas.chat import ChatAction


FOLLOW_UP_EMAIL_TEMPLATE = """Subject: Follow-up on [Topic]

Hi [Name],

I wanted to follow up on our previous conversation regarding [specific topic]. 

Based on our discussion, the next steps are:
• [Action item 1]
• [Action item 2]
• [Action item 3]

Please let me know if you have any questions or if there's anything else I can help clarify.

Best regards,
[Your name]"""

MEETING_REQUEST_EMAIL_TEMPLATE = """Subject: Meeting Request - [Topic]

Hi [Name],

I hope this email finds you well. I'd like to schedule a meeting to discuss [topic/project].

Would you be available for a [30/60] minute meeting on [proposed date/time]? I'm also flexible with [alternative times].

Agenda items:
• [Item 1]
• [Item 2]
• [Item 3]

Please let me know what works best for your schedule.

Best regards,
[Your name]"""

EMAIL_DRAFT_TEMPLATE = """I'll help you draft a professional email. Based on your communication style, here's a template:

Subject: [Your subject here]

Hi [Recipient name],

[Opening line - context or greeting]

[Main message content]

[Call to action or next steps]

Best regards,
[Your name]

Would you like me to customize this template for your specific needs?"""

MEETING_PREP_TEMPLATE = """I'll help you prepare for your meeting! Here's a comprehensive preparation plan:

**Meeting Agenda Template:**
1. Opening & Introductions (5 min)
2. Review Previous Action Items (10 min)
3. Main Discussion Topics:
   • [Topic 1] (15 min)
   • [Topic 2] (15 min)
   • [Topic 3] (10 min)
4. Next Steps & Action Items (5 min)
5. Schedule Follow-up (5 min)

**Key Talking Points:**
• Current project status and milestones
• Challenges and proposed solutions
• Resource requirements and timelines
• Decision points requiring input

**Questions to Ask:**
• What are the main priorities for this quarter?
• Are there any blockers we should address?
• How can we improve our current process?

**Action Items Template:**
- [ ] [Task] - Assigned to: [Name] - Due: [Date]
- [ ] [Task] - Assigned to: [Name] - Due: [Date]

Would you like me to customize this for your specific meeting topic?"""

REPORT_GENERATION_TEMPLATE = """I'll help you create a comprehensive report. Here's a structured template:

**EXECUTIVE SUMMARY**
[Brief overview of key findings and recommendations]

**1. INTRODUCTION**
• Project/Analysis Overview
• Scope and Objectives
• Methodology Used

**2. KEY FINDINGS**
• Finding 1: [Description and supporting data]
• Finding 2: [Description and supporting data]
• Finding 3: [Description and supporting data]

**3. DATA ANALYSIS**
• Performance Metrics
• Trend Analysis
• Comparative Analysis

**4. RECOMMENDATIONS**
• Immediate Actions Required
• Medium-term Strategies
• Long-term Considerations

**5. NEXT STEPS**
• Priority Actions
• Timeline and Milestones
• Resource Requirements

**6. APPENDIX**
• Supporting Data
• Detailed Charts/Graphs
• Reference Materials

Would you like me to populate specific sections with your data?"""

TASK_MANAGEMENT_TEMPLATE = """I'll help you organize and prioritize your tasks! Here's an optimized task management approach:

**HIGH PRIORITY (Do First)**
• [Critical task with deadline]
• [Important meeting preparation]
• [Urgent client response]

**MEDIUM PRIORITY (Schedule Soon)**
• [Project milestone work]
• [Team coordination tasks]
• [Regular reporting duties]

**LOW PRIORITY (Do When Available)**
• [Research and learning]
• [Process improvements]
• [Documentation updates]

**TASK AUTOMATION OPPORTUNITIES**
• Email responses → Set up templates
• Meeting scheduling → Use calendar integration
• Status reports → Automate data collection
• File organization → Set up folder rules

**DELEGATION POSSIBILITIES**
• [Task 1] → [Team member]
• [Task 2] → [Team member]
• [Task 3] → [External resource]

**ESTIMATED TIME SAVINGS**
With proper prioritization and automation: ~2-3 hours per day

Would you like me to help you break down any specific tasks or set up automation rules?"""

INTEGRATION_SETUP_TEMPLATE = """Let's connect your tools so I can work across them! Here's the setup plan:

**AVAILABLE INTEGRATIONS**
• Salesforce CRM → Leads, opportunities and account sync
• Microsoft Office 365 → Mail, calendar and OneDrive
• Google Workspace → Gmail, Calendar and Drive
• Slack → Channel monitoring and automated responses
• Zoom → Meeting transcription and follow-ups
• Jira → Ticket creation and sprint tracking

**HOW TO CONNECT**
1. Open the Integrations page
2. Choose a platform and click Connect
3. Approve the requested permissions with your provider
4. You'll be redirected back once the connection is verified

**WHAT HAPPENS NEXT**
• I run a quick connection test
• Sync starts in the background
• New automation suggestions appear on your dashboard

Which platform would you like to connect first?"""

EMAIL_TEMPLATE = "I'll help you draft an email! Based on your communication style, I recommend a professional yet friendly tone. Here's a template:\n\nSubject: [Your subject here]\n\nHi [Name],\n\nI hope this email finds you well. [Your message content]\n\nBest regards,\n[Your name]\n\nWould you like me to customize this further or help with specific content?"

MEETING_TEMPLATE = "I can help you with meeting preparation! Based on your calendar patterns, I notice you prefer meetings on Tuesday-Wednesday mornings. I can:\n\n• Generate meeting agendas\n• Prepare talking points\n• Send calendar invites\n• Create follow-up tasks\n\nWhat specific meeting support do you need?"

REPORT_TEMPLATE = "I'll help you create a comprehensive report! Based on your previous documents, you prefer structured reports with:\n\n• Executive Summary\n• Key Findings\n• Data Analysis\n• Recommendations\n• Next Steps\n\nWhat data or topic should I analyze for your report?"

TASK_TEMPLATE = "Let me help you organize your tasks! I can:\n\n• Prioritize your to-do list\n• Set up automated reminders\n• Break down complex projects\n• Delegate tasks to team members\n• Track progress and deadlines\n\nWhat tasks would you like me to help organize?"

INTEGRATION_TEMPLATE = "I can connect with the tools you already use! Supported platforms include Salesforce, Office 365, Google Workspace, Slack, Zoom and Jira. Once connected I can:\n\n• Sync contacts, deals and calendars\n• Automate routine updates between platforms\n• Trigger workflows from new emails or messages\n• Summarize activity across your tools\n\nWhich platform would you like to connect or automate?"

GREETING_TEMPLATE = """Hello! I'm your RockstarAI assistant, trained on your knowledge base and work patterns. I can help you with:

• Email drafting and communication
• Meeting preparation and follow-ups  
• Report generation and analysis
• Task prioritization and automation
• Document processing and insights

What would you like to work on today?"""

HELP_TEMPLATE = """I'm here to make you a rockstar at work! Here's how I can help:

**📧 Communication Assistant**
• Draft emails in your style
• Generate meeting agendas
• Create follow-up messages

**📊 Analysis & Reporting**
• Process and summarize documents
• Generate comprehensive reports
• Extract key insights from data

**⚡ Task Automation**
• Prioritize your daily tasks
• Set up workflow automation
• Manage project timelines

**🔗 Integration Support**
• Connect with Salesforce, Office 365, Slack
• Sync data across platforms
• Automate routine processes

I've learned from your communication patterns, meeting preferences, and work style. Just tell me what you need help with!"""

DEFAULT_TEMPLATE = """I understand you need assistance with that. Based on your work patterns and the knowledge I've learned from your uploads, I can help you accomplish this task more efficiently. 

Could you provide a bit more detail about what specific outcome you're looking for? I can then:

• Break down the task into manageable steps
• Provide templates or frameworks
• Suggest automation opportunities
• Connect with your existing tools and workflows

What's the most important aspect of this task that you'd like me to focus on?"""


@dataclass(frozen=True)
class TemplateRule:
    """One entry of the ordered template table."""

    name: str
    template: str
    action: Optional[ChatAction] = None
    keywords: Tuple[str, ...] = ()
    autonomous_actions: Tuple[str, ...] = ()
    integrations: Tuple[str, ...] = ()

    def matches(self, text: str, action: Optional[ChatAction]) -> bool:
        if self.action is not None and self.action != action:
            return False
        if not self.keywords:
            return True
        return any(keyword in text for keyword in self.keywords)


_EMAIL_ACTIONS = ("draft_email", "apply_writing_style")
_EMAIL_INTEGRATIONS = ("microsoft365", "google_workspace")
_MEETING_ACTIONS = ("generate_agenda", "prepare_talking_points", "create_follow_up_tasks")
_MEETING_INTEGRATIONS = ("microsoft365", "google_workspace", "zoom")
_REPORT_ACTIONS = ("collect_report_data", "generate_report_outline")
_REPORT_INTEGRATIONS = ("salesforce", "google_workspace")
_TASK_ACTIONS = ("prioritize_tasks", "schedule_reminders", "suggest_automations")
_TASK_INTEGRATIONS = ("jira", "slack")
_INTEGRATION_ACTIONS = ("recommend_integrations", "start_oauth_connection")
_INTEGRATION_INTEGRATIONS = ("salesforce", "microsoft365", "google_workspace", "slack", "zoom", "jira")


TEMPLATE_RULES: List[TemplateRule] = [
    # Explicit actions take precedence over message keywords
    TemplateRule(
        name="email_follow_up",
        template=FOLLOW_UP_EMAIL_TEMPLATE,
        action=ChatAction.EMAIL_DRAFT,
        keywords=("follow up", "followup"),
        autonomous_actions=_EMAIL_ACTIONS,
        integrations=_EMAIL_INTEGRATIONS,
    ),
    TemplateRule(
        name="email_meeting_request",
        template=MEETING_REQUEST_EMAIL_TEMPLATE,
        action=ChatAction.EMAIL_DRAFT,
        keywords=("meeting", "schedule"),
        autonomous_actions=_EMAIL_ACTIONS + ("propose_meeting_times",),
        integrations=_MEETING_INTEGRATIONS,
    ),
    TemplateRule(
        name="email_draft",
        template=EMAIL_DRAFT_TEMPLATE,
        action=ChatAction.EMAIL_DRAFT,
        autonomous_actions=_EMAIL_ACTIONS,
        integrations=_EMAIL_INTEGRATIONS,
    ),
    TemplateRule(
        name="meeting_prep",
        template=MEETING_PREP_TEMPLATE,
        action=ChatAction.MEETING_PREP,
        autonomous_actions=_MEETING_ACTIONS,
        integrations=_MEETING_INTEGRATIONS,
    ),
    TemplateRule(
        name="report_generation",
        template=REPORT_GENERATION_TEMPLATE,
        action=ChatAction.REPORT_GENERATION,
        autonomous_actions=_REPORT_ACTIONS,
        integrations=_REPORT_INTEGRATIONS,
    ),
    TemplateRule(
        name="task_management",
        template=TASK_MANAGEMENT_TEMPLATE,
        action=ChatAction.TASK_MANAGEMENT,
        autonomous_actions=_TASK_ACTIONS,
        integrations=_TASK_INTEGRATIONS,
    ),
    TemplateRule(
        name="integration_setup",
        template=INTEGRATION_SETUP_TEMPLATE,
        action=ChatAction.INTEGRATION_SETUP,
        autonomous_actions=_INTEGRATION_ACTIONS,
        integrations=_INTEGRATION_INTEGRATIONS,
    ),
    # Message keywords
    TemplateRule(
        name="email",
        template=EMAIL_TEMPLATE,
        keywords=("email", "draft"),
        autonomous_actions=_EMAIL_ACTIONS,
        integrations=_EMAIL_INTEGRATIONS,
    ),
    TemplateRule(
        name="meeting",
        template=MEETING_TEMPLATE,
        keywords=("meeting", "schedule"),
        autonomous_actions=_MEETING_ACTIONS,
        integrations=_MEETING_INTEGRATIONS,
    ),
    TemplateRule(
        name="report",
        template=REPORT_TEMPLATE,
        keywords=("report", "analysis"),
        autonomous_actions=_REPORT_ACTIONS,
        integrations=_REPORT_INTEGRATIONS,
    ),
    TemplateRule(
        name="task",
        template=TASK_TEMPLATE,
        keywords=("task", "todo", "workflow"),
        autonomous_actions=_TASK_ACTIONS,
        integrations=_TASK_INTEGRATIONS,
    ),
    TemplateRule(
        name="integration",
        template=INTEGRATION_TEMPLATE,
        keywords=("integration", "connect", "automate"),
        autonomous_actions=_INTEGRATION_ACTIONS,
        integrations=_INTEGRATION_INTEGRATIONS,
    ),
    TemplateRule(
        name="greeting",
        template=GREETING_TEMPLATE,
        keywords=("hello", "hi"),
    ),
    TemplateRule(
        name="help",
        template=HELP_TEMPLATE,
        keywords=("help", "what can you do"),
        integrations=("salesforce", "microsoft365", "slack"),
    ),
]

DEFAULT_RULE = TemplateRule(name="default", template=DEFAULT_TEMPLATE)


def select_rule(
    message: str,
    action: Optional[ChatAction] = None,
    rules: Sequence[TemplateRule] = TEMPLATE_RULES,
) -> TemplateRule:
    """Return the first rule matching the message/action pair, or the default rule."""
    text = (message or "").lower()
    if action == ChatAction.GENERAL:
        action = None
    for rule in rules:
        if rule.matches(text, action):
            return rule
    return DEFAULT_RULE


def select_template(message: str, action: Optional[ChatAction] = None) -> str:
    return select_rule(message, action).template


# Replies used by the embeddable widget. Served to the browser as JSON.
WIDGET_RULES: List[TemplateRule] = [
    TemplateRule(
        name="email",
        keywords=("email", "draft"),
        template="""🔥 I'll help you draft that email! Here's a professional template:

Subject: [Your Topic]

Hi [Name],

Hope you're doing well! [Your message]

Let me know if you need anything else.

Best,
[Your name]

Want me to customize this further?""",
    ),
    TemplateRule(
        name="meeting",
        keywords=("meeting", "schedule"),
        template="""📅 Let's prepare for your meeting! Here's what I suggest:

AGENDA:
• Opening & introductions (5 min)
• Main topics discussion
• Action items & next steps

PREPARATION:
• Review previous notes
• Prepare key talking points
• Set clear objectives

Need help with specific agenda items?""",
    ),
    TemplateRule(
        name="task",
        keywords=("task", "organize"),
        template="""✅ I'll help organize your tasks! Here's a smart approach:

HIGH PRIORITY:
• Urgent deadlines
• Important meetings
• Critical decisions

MEDIUM PRIORITY:
• Regular work items
• Team coordination
• Project milestones

Want me to help prioritize specific tasks?""",
    ),
    TemplateRule(
        name="report",
        keywords=("report", "analysis"),
        template="""📊 Let's create a powerful report! Template structure:

• Executive Summary
• Key Findings
• Data Analysis
• Recommendations
• Next Steps

This format makes you look like a pro! What topic should we cover?""",
    ),
]

WIDGET_DEFAULT_TEMPLATE = """🚀 I'm here to make you a rockstar at work! I can help with:

• Email drafting & responses
• Meeting preparation & agendas
• Task organization & prioritization
• Report generation & analysis
• Document processing & insights

What specific task can I help you dominate today?"""


def widget_rules_payload() -> dict:
    """Serializable form of the widget table consumed by widget.js"""
    return {
        "rules": [
            {"keywords": list(rule.keywords), "response": rule.template}
            for rule in WIDGET_RULES
        ],
        "fallback": WIDGET_DEFAULT_TEMPLATE,
    }
