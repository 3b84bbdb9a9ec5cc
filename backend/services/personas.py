"""Default cast, channels and conflict scenarios of the Slack roleplay."""

from models.schemas.roleplay import Channel, Persona, Scenario

CURRENT_USER_ID = "u_me"

DEFAULT_PERSONAS: list[Persona] = [
    Persona(id=CURRENT_USER_ID, name="Alex (You)", role="Product Manager"),
    Persona(
        id="u_eng_lead",
        name="Dave Chen",
        role="Engineering Lead",
        bio=(
            "Experienced, slightly cynical backend engineer. Cares about scalability, "
            "hates technical debt and last minute changes. Protective of his team's time."
        ),
    ),
    Persona(
        id="u_designer",
        name="Sarah Miller",
        role="Product Designer",
        status="busy",
        bio=(
            "Detail-oriented creative. Loves whitespace, hates when engineers un-align pixels. "
            "Often asks for \"more time to explore\" and pushes for perfect UX over speed."
        ),
    ),
    Persona(
        id="u_vp",
        name="Karen Volt",
        role="VP of Product",
        bio=(
            "High energy, metrics-focused. Constantly asking \"when is this shipping?\" and "
            "\"what is the impact on retention?\". Hates excuses."
        ),
    ),
    Persona(
        id="u_sales",
        name="Jim Halpert",
        role="Sales Lead",
        status="offline",
        bio=(
            "Friendly but demanding. Always promising features to customers that do not "
            "exist yet. Thinks engineering can \"just squeeze it in\"."
        ),
    ),
    Persona(
        id="u_junior",
        name="Ryan Temp",
        role="Junior Dev",
        bio="Eager to please, asks a lot of questions, breaks production occasionally. Scared of Dave.",
    ),
]

DEFAULT_CHANNELS: list[Channel] = [
    Channel(
        id="c_general",
        name="general",
        purpose="Company-wide announcements and fun stuff",
        member_ids=["u_me", "u_eng_lead", "u_designer", "u_vp", "u_sales", "u_junior"],
    ),
    Channel(
        id="c_eng",
        name="engineering",
        purpose="Code, deploys, and rubber ducks",
        member_ids=["u_me", "u_eng_lead", "u_junior"],
    ),
    Channel(
        id="c_design",
        name="design-system",
        purpose="Figma links and critiques",
        member_ids=["u_me", "u_designer", "u_junior"],
    ),
    Channel(
        id="c_project_nexus",
        name="proj-nexus",
        purpose="War room for the Nexus launch (Q3)",
        member_ids=["u_me", "u_eng_lead", "u_designer", "u_vp"],
    ),
]

DEFAULT_SCENARIOS: list[Scenario] = [
    Scenario(
        id="sc_scope_creep",
        title="The Sales Promise",
        description=(
            "Jim from Sales has promised a feature to a big client that is not on the "
            "roadmap. Engineering is already over capacity."
        ),
        channel_id="c_general",
        initiator_id="u_sales",
        initial_message=(
            "Hey @Alex, I just got off the phone with Enterprise Corp. I told them we can "
            "definitely include the \"Custom Reporting\" module in the release next week. "
            "They're ready to sign a $50k deal if we do. Huge win!"
        ),
        stakeholders=["u_sales", "u_eng_lead", "u_vp"],
    ),
    Scenario(
        id="sc_design_delay",
        title="Design Perfectionism",
        description=(
            "Sarah wants to delay the launch to fix \"visual polish\". Karen (VP) wants "
            "to launch now to hit quarterly goals."
        ),
        channel_id="c_project_nexus",
        initiator_id="u_designer",
        initial_message=(
            "I've been reviewing the staging build and the animations are just not snappy "
            "enough. I strongly recommend we push the launch back by 3 days to refactor "
            "the transition layer."
        ),
        stakeholders=["u_designer", "u_vp", "u_eng_lead"],
    ),
    Scenario(
        id="sc_tech_debt",
        title="The Critical Refactor",
        description=(
            "Dave wants to stop all feature work for a \"Sprint of Stabilization\". "
            "Karen thinks it's a waste of time."
        ),
        channel_id="c_eng",
        initiator_id="u_eng_lead",
        initial_message=(
            "@Alex we have a problem. The database latency is spiking. I need to pull "
            "2 engineers off feature work to fix this ASAP."
        ),
        stakeholders=["u_eng_lead", "u_vp"],
    ),
]


def find_persona(persona_id: str, personas: list[Persona] | None = None) -> Persona | None:
    for persona in personas or DEFAULT_PERSONAS:
        if persona.id == persona_id:
            return persona
    return None
