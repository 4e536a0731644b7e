"""Built-in playbook templates shipped with the service.

Templates live only in code: they are never written to a store and the
authoring surface refuses to edit or delete them. Membership is by exact id.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from validation_playbooks.schemas.playbooks import Playbook

TEMPLATE_CATEGORY = "Built-in Template"


def _path(
    path_id: str,
    name: str,
    action: str,
    description: str,
    conditions: list[str],
) -> dict[str, Any]:
    return {
        "id": path_id,
        "name": name,
        "action": action,
        "description": description,
        "conditions": conditions,
    }


def _template(
    template_id: str,
    title: str,
    description: str,
    published: datetime,
    paths: list[dict[str, Any]],
    **extra: Any,
) -> Playbook:
    return Playbook.model_validate(
        {
            "id": template_id,
            "title": title,
            "description": description,
            "category": TEMPLATE_CATEGORY,
            "created_at": published,
            "updated_at": published,
            "escalation_paths": paths,
            **extra,
        },
    )


DEFAULT_AI_VALIDATION_TEMPLATE = _template(
    "default",
    "Default AI Validation Playbook",
    "An example framework for validating AI-generated content across different use cases. "
    "This template outlines a structured way to decide when AI content may need human review, "
    "expert input, or when it might be best to avoid using it.",
    datetime(2025, 9, 26, tzinfo=UTC),
    [
        _path(
            "1",
            "Internal Verification",
            "verify",
            "Content should be verified by internal team members before publication or use. "
            "This path ensures that AI-generated content aligns with organizational standards, "
            "brand voice, and factual accuracy.",
            [
                "Sensitive business information or proprietary data",
                "Legal or compliance implications",
                "Customer-facing communications",
                "Financial data or projections",
                "Product specifications or technical documentation",
                "Marketing materials representing the brand",
                "Internal policies or procedures",
                "Performance metrics or analytics reports",
            ],
        ),
        _path(
            "2",
            "External Expert Review",
            "consult",
            "Content should be reviewed by subject matter experts or external consultants. "
            "This path is critical for specialized domains where accuracy and expertise are "
            "paramount.",
            [
                "Technical or specialized domain knowledge required",
                "High-impact business decisions",
                "Novel or complex subject matter",
                "Industry-specific regulations or standards",
                "Scientific or research-based content",
                "Strategic planning or forecasting",
                "Cross-functional initiatives requiring multiple perspectives",
                "Content that could impact stakeholder relationships",
            ],
        ),
        _path(
            "3",
            "Avoid AI Content",
            "avoid",
            "Do not use AI-generated content in these scenarios. Human judgment, expertise, and "
            "accountability are essential for these sensitive situations.",
            [
                "Highly sensitive personal information (PII, health records)",
                "Legal advice or binding legal documents",
                "Medical diagnosis or treatment recommendations",
                "Content requiring human empathy and emotional intelligence",
                "Situations where accuracy is absolutely critical",
                "Crisis communications or emergency responses",
                "Ethical decision-making or moral judgments",
                "Personnel decisions (hiring, firing, promotions)",
                "Content that could cause harm if incorrect",
            ],
        ),
    ],
    resources=[
        {
            "title": "Systematic Literature Review of Validation Methods for AI Systems",
            "description": "Surveys real-world methods (trials, simulation, expert review) "
            "for validating AI systems.",
            "url": "https://arxiv.org/abs/2104.01562",
        },
        {
            "title": "Human-in-the-Loop Architectures for Validating GenAI Outputs in "
            "Clinical Settings",
            "description": "How human oversight can be built into high-stakes workflows: "
            "model confidence, explainability, review checkpoints.",
            "url": "https://eajournals.org/ijhsse/vol12-issue-3-2024/"
            "human-in-the-loop-architectures-for-validating-genai-outputs-in-clinical-settings/",
        },
        {
            "title": "Improving the Efficiency of Human-in-the-Loop Systems: Adding Artificial "
            "to Human Experts",
            "description": "Reducing human burden with artificial experts that learn from "
            "human corrections.",
            "url": "https://arxiv.org/abs/2106.05976",
        },
        {
            "title": "Validation of Artificial Intelligence Containing Products Across the "
            "Regulated Healthcare Industries",
            "description": "Validation methodologies for regulated domains: compliance, "
            "safety, governance.",
            "url": "https://pubmed.ncbi.nlm.nih.gov/38234351/",
        },
        {
            "title": "Human-in-the-Loop AI in Document Workflows: Best Practices & Common "
            "Pitfalls",
            "description": "Practical guide to document review workflows where humans "
            "review or correct AI output.",
            "url": "https://parseur.com/blog/"
            "human-in-the-loop-ai-in-document-workflows-best-practices-common-pitfalls",
        },
    ],
)

CONTENT_MODERATION_WORKFLOW = _template(
    "content-moderation",
    "Content Moderation Workflow",
    "A specialized workflow for moderating user-generated content with AI assistance. "
    "This playbook helps teams efficiently review and manage community content while "
    "maintaining safety and quality standards.",
    datetime(2025, 9, 25, tzinfo=UTC),
    [
        _path(
            "1",
            "Automated Approval",
            "verify",
            "Content that passes all automated checks and can be approved without human review.",
            [
                "Content flagged as safe by AI moderation tools",
                "User has good standing history",
                "Content type is low-risk (e.g., general discussion)",
                "No sensitive topics or keywords detected",
                "Complies with community guidelines automatically",
                "Similar to previously approved content",
            ],
        ),
        _path(
            "2",
            "Human Moderator Review",
            "consult",
            "Content that requires human moderator review due to potential policy violations "
            "or ambiguous context.",
            [
                "AI confidence score is below threshold",
                "Content contains borderline language or imagery",
                "User has previous warnings or violations",
                "Content involves sensitive topics (politics, religion, health)",
                "Multiple users have reported the content",
                "Content is in a gray area of community guidelines",
                "New content type or format not well-trained in AI models",
                "Context requires cultural or situational understanding",
            ],
        ),
        _path(
            "3",
            "Immediate Removal & Escalation",
            "avoid",
            "Content that violates clear policies and should be immediately removed. These "
            "cases may require further action such as user suspension or legal review.",
            [
                "Explicit violence, gore, or graphic content",
                "Hate speech or targeted harassment",
                "Sexual content involving minors",
                "Illegal activities or content",
                "Doxxing or sharing private information",
                "Credible threats of harm",
                "Spam or malicious links",
                "Copyright infringement or intellectual property violations",
                "Coordinated inauthentic behavior",
            ],
        ),
        _path(
            "4",
            "Appeal Review Process",
            "consult",
            "Content that users have appealed after initial moderation decisions. Requires "
            "senior moderator or policy team review.",
            [
                "User has submitted an appeal",
                "Original decision was made by automated system",
                "Content has high engagement or visibility",
                "Decision involves interpretation of new or updated policies",
                "Multiple moderators have disagreed on the decision",
                "Content creator is a verified or high-profile user",
            ],
        ),
    ],
)

CODE_REVIEW_WORKFLOW = _template(
    "code-review",
    "AI-Assisted Code Review Workflow",
    "An example workflow for reviewing AI-generated code in software development. Helps "
    "teams decide when AI code suggestions need human review, testing, or should be avoided.",
    datetime(2025, 10, 1, tzinfo=UTC),
    [
        _path(
            "1",
            "Auto-Merge with Tests",
            "approve",
            "Low-risk code changes that can be merged after automated testing passes.",
            [
                "Code formatting or style improvements",
                "Documentation updates or comments",
                "Simple bug fixes with clear test coverage",
                "Dependency version updates (minor/patch)",
                "Refactoring with no logic changes",
                "Adding logging or debugging statements",
            ],
        ),
        _path(
            "2",
            "Peer Code Review",
            "review",
            "Code that requires human developer review before merging.",
            [
                "New feature implementation",
                "Business logic changes",
                "Database schema modifications",
                "API endpoint changes",
                "Performance optimizations",
                "Code affecting multiple modules",
                "Changes to authentication or authorization",
                "Third-party integrations",
            ],
        ),
        _path(
            "3",
            "Senior/Architect Review",
            "escalate",
            "Critical code that requires review by senior developers or architects.",
            [
                "Security-sensitive code (encryption, authentication)",
                "Core infrastructure or framework changes",
                "Major architectural decisions",
                "Changes affecting system scalability",
                "Database migration scripts",
                "Payment processing or financial transactions",
                "Data privacy or compliance-related code",
                "Breaking API changes",
            ],
        ),
        _path(
            "4",
            "Manual Implementation Required",
            "avoid",
            "Scenarios where AI-generated code should not be used.",
            [
                "Cryptographic implementations",
                "Security vulnerability fixes",
                "Regulatory compliance code (HIPAA, GDPR, SOC2)",
                "Production incident hotfixes",
                "Code involving personal health information",
                "Financial calculations or billing logic",
                "Access control or permission systems",
                "Code that could cause data loss",
            ],
        ),
    ],
)

DESIGN_REVIEW_WORKFLOW = _template(
    "design-review",
    "AI-Generated Design Review Workflow",
    "An example framework for reviewing AI-generated designs, mockups, and visual assets. "
    "Helps design teams maintain quality and brand consistency.",
    datetime(2025, 10, 1, tzinfo=UTC),
    [
        _path(
            "1",
            "Quick Approval",
            "approve",
            "Low-risk design assets that align with brand guidelines.",
            [
                "Internal presentation slides",
                "Social media graphics (non-promotional)",
                "Stock image selection or curation",
                "Basic icon or illustration variations",
                "Template-based designs",
                "Internal documentation visuals",
            ],
        ),
        _path(
            "2",
            "Design Team Review",
            "review",
            "Designs that need review by the design team for quality and brand consistency.",
            [
                "Marketing materials or campaigns",
                "Website or app UI components",
                "Brand-adjacent visual content",
                "Customer-facing graphics",
                "Product packaging concepts",
                "Email templates or newsletters",
                "Infographics or data visualizations",
            ],
        ),
        _path(
            "3",
            "Brand/Creative Director Approval",
            "escalate",
            "High-impact designs requiring approval from brand or creative leadership.",
            [
                "Logo or brand identity elements",
                "Major campaign creative",
                "Product launch materials",
                "Brand guideline updates",
                "High-visibility public communications",
                "Partnership or co-branding materials",
                "Trade show or event branding",
            ],
        ),
        _path(
            "4",
            "Human Designer Required",
            "avoid",
            "Design work that requires human creativity or cultural sensitivity.",
            [
                "Designs involving cultural or religious symbolism",
                "Sensitive social or political topics",
                "Accessibility-critical interfaces",
                "Legal or regulatory required disclosures",
                "Designs requiring emotional intelligence",
                "Crisis communication visuals",
                "Designs involving real people or testimonials",
            ],
        ),
    ],
)

COMMUNICATIONS_WORKFLOW = _template(
    "communications",
    "Communications & PR Review Workflow",
    "An example workflow for validating AI-generated communications, press releases, and "
    "public statements. Ensures messaging is accurate, on-brand, and appropriate.",
    datetime(2025, 10, 1, tzinfo=UTC),
    [
        _path(
            "1",
            "Internal Communications",
            "verify",
            "Routine internal messages that can be sent with light review.",
            [
                "Team meeting notes or summaries",
                "Internal newsletter content",
                "Routine status updates",
                "Event invitations or reminders",
                "General company announcements",
                "Internal FAQ responses",
            ],
        ),
        _path(
            "2",
            "Communications Team Review",
            "review",
            "External communications requiring review by communications professionals.",
            [
                "Blog posts or articles",
                "Social media posts",
                "Customer email campaigns",
                "Product update announcements",
                "Partner communications",
                "Community forum responses",
                "Media kit materials",
            ],
        ),
        _path(
            "3",
            "Executive/Legal Review",
            "escalate",
            "High-stakes communications requiring executive approval and potentially legal "
            "review.",
            [
                "Press releases or media statements",
                "Crisis communications",
                "Earnings or financial announcements",
                "Merger or acquisition communications",
                "Regulatory filings or responses",
                "Executive thought leadership",
                "Policy position statements",
                "Responses to media inquiries",
            ],
        ),
        _path(
            "4",
            "Human-Only Communications",
            "avoid",
            "Sensitive communications that require human judgment and empathy.",
            [
                "Apologies or crisis responses",
                "Layoff or restructuring announcements",
                "Condolences or sympathy messages",
                "Legal disputes or litigation",
                "Whistleblower or ethics concerns",
                "Personal employee matters",
                "Responses to serious incidents or accidents",
                "Communications involving minors or vulnerable populations",
            ],
        ),
    ],
)

PLAYBOOK_TEMPLATES: tuple[Playbook, ...] = (
    DEFAULT_AI_VALIDATION_TEMPLATE,
    CONTENT_MODERATION_WORKFLOW,
    CODE_REVIEW_WORKFLOW,
    DESIGN_REVIEW_WORKFLOW,
    COMMUNICATIONS_WORKFLOW,
)
_TEMPLATES_BY_ID = {template.id: template for template in PLAYBOOK_TEMPLATES}


def is_builtin_template(playbook_id: str) -> bool:
    # TODO: reserve template ids in PlaybookGateway.create; templates and stored
    # playbooks share one id namespace, so a stored "default" is shadowed.
    return playbook_id in _TEMPLATES_BY_ID


def get_template(playbook_id: str) -> Playbook | None:
    """Return a copy so callers cannot mutate the shipped template."""
    template = _TEMPLATES_BY_ID.get(playbook_id)
    return template.model_copy(deep=True) if template is not None else None


def list_templates() -> list[Playbook]:
    return [template.model_copy(deep=True) for template in PLAYBOOK_TEMPLATES]
