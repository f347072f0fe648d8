"""履歴書からジャーナルエントリー候補を抽出するためのプロンプト"""


def build_resume_prompt(resume_text: str) -> str:
    """
    Args:
        resume_text: 切り詰め済みの履歴書テキスト
    """
    return f"""You are an AI assistant that extracts key information from resumes. Analyze the following resume text and extract:

1. Work Experience: List each job/role with company, title, duration, and key achievements
2. Projects: Notable projects mentioned
3. Skills & Technologies: Technical skills and tools mentioned
4. Education: Degrees and certifications

Resume Text:
{resume_text}

Create 3-5 journal entries based on this resume. Each entry should focus on a significant role, project, or achievement. Return ONLY a valid JSON array with this structure:
[
  {{
    "title": "string (e.g., 'Senior Developer at TechCorp')",
    "content": "string (detailed description of role, achievements, learnings)",
    "category": "string (e.g., 'Experience', 'Project', 'Achievement')",
    "tags": ["string", "string"] (relevant technologies and skills)
  }}
]"""
