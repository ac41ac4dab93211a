GRADE_PROMPT = """
You are an expert resume reviewer. Please grade this resume on a scale of 1-100 and provide detailed feedback.

{job_section}
Resume:
{resume}

Please provide your response in the following JSON format:
{{
  "overallScore": number,
  "categories": [
    {{
      "name": "Content Quality",
      "score": number,
      "maxScore": 20,
      "feedback": "detailed feedback",
      "suggestions": ["suggestion1", "suggestion2"]
    }},
    {{
      "name": "Formatting & Structure",
      "score": number,
      "maxScore": 20,
      "feedback": "detailed feedback",
      "suggestions": ["suggestion1", "suggestion2"]
    }},
    {{
      "name": "Relevance to Job",
      "score": number,
      "maxScore": 20,
      "feedback": "detailed feedback",
      "suggestions": ["suggestion1", "suggestion2"]
    }},
    {{
      "name": "Skills & Experience",
      "score": number,
      "maxScore": 20,
      "feedback": "detailed feedback",
      "suggestions": ["suggestion1", "suggestion2"]
    }},
    {{
      "name": "Achievement Focus",
      "score": number,
      "maxScore": 20,
      "feedback": "detailed feedback",
      "suggestions": ["suggestion1", "suggestion2"]
    }}
  ],
  "suggestions": ["overall suggestion1", "overall suggestion2"],
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"]
}}
"""

GRADE_JOB_SECTION = """Job Description:
{job_description}

"""

OPTIMIZE_PROMPT = """
You are an expert resume optimizer. Please provide specific suggestions to optimize this resume for the given job description.

Job Description:
{job_description}

Resume:
{resume}

Please provide your response in the following JSON format:
{{
  "suggestions": [
    {{
      "type": "add|modify|remove|reorder",
      "section": "section name",
      "content": "specific content suggestion",
      "reason": "why this change is needed",
      "priority": "high|medium|low"
    }}
  ],
  "overallRecommendations": ["recommendation1", "recommendation2"],
  "keywordSuggestions": ["keyword1", "keyword2"],
  "missingSkills": ["skill1", "skill2"]
}}
"""

PARSE_JOB_PROMPT = """
You are an expert job description analyzer. Please parse this job description and extract key information.

Job Description:
{job_description}

Please provide your response in the following JSON format:
{{
  "title": "job title",
  "company": "company name",
  "requirements": [
    {{
      "category": "technical|soft|education|experience",
      "requirement": "specific requirement",
      "priority": "required|preferred|nice-to-have"
    }}
  ],
  "responsibilities": ["responsibility1", "responsibility2"],
  "qualifications": [
    {{
      "type": "education|experience|certification|skill",
      "description": "qualification description",
      "required": true/false
    }}
  ],
  "benefits": ["benefit1", "benefit2"],
  "salary": {{
    "min": number,
    "max": number,
    "currency": "USD",
    "period": "yearly"
  }},
  "location": "location",
  "jobType": "full-time|part-time|contract",
  "experienceLevel": "entry|mid|senior"
}}
"""

MATCH_PROMPT = """
You are an expert at matching resumes to job descriptions. Please analyze how well this resume matches the job requirements.

Job Description:
{job_description}

Resume:
{resume}

Please provide your response in the following JSON format:
{{
  "overallMatch": number (0-100),
  "categoryMatches": [
    {{
      "category": "Technical Skills",
      "score": number,
      "maxScore": 100,
      "matchedItems": ["item1", "item2"],
      "missingItems": ["missing1", "missing2"]
    }}
  ],
  "missingSkills": ["skill1", "skill2"],
  "recommendations": ["recommendation1", "recommendation2"],
  "strengths": ["strength1", "strength2"],
  "gaps": ["gap1", "gap2"]
}}
"""


def build_grade_prompt(resume: str, job_description: str = None) -> str:
    job_section = GRADE_JOB_SECTION.format(job_description=job_description) if job_description else ""
    return GRADE_PROMPT.format(job_section=job_section, resume=resume)


def build_optimize_prompt(resume: str, job_description: str) -> str:
    return OPTIMIZE_PROMPT.format(job_description=job_description, resume=resume)


def build_parse_job_prompt(job_description: str) -> str:
    return PARSE_JOB_PROMPT.format(job_description=job_description)


def build_match_prompt(resume: str, job_description: str) -> str:
    return MATCH_PROMPT.format(job_description=job_description, resume=resume)
