from dataclasses import dataclass
from typing import Optional
import logging

from servicematch.advisor.service import ProjectAdvisor
from servicematch.catalog import ServiceCatalog
from servicematch.config_loader import AppConfig, LlmConfig
from servicematch.directory import ProviderDirectory
from servicematch.llm.handle import LLMHandle
from servicematch.llm.openai_service import OpenAIService
from servicematch.llm.policy import LLMCallPolicy
from servicematch.matcher.candidate_filter import CandidateFilter
from servicematch.matcher.service import MatchOrchestrator
from servicematch.scorer.ai_scorer import AIScoringAdapter
from servicematch.scorer.deterministic import DeterministicScorer

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once at startup. The LLM provider sits behind llm_handle, so
    rotate_credentials() reaches the scorer and the advisor without
    rebuilding the graph.
    """
    config: AppConfig
    catalog: ServiceCatalog
    llm_handle: LLMHandle
    llm_calls: LLMCallPolicy
    deterministic_scorer: DeterministicScorer
    scorer: AIScoringAdapter
    candidate_filter: CandidateFilter
    orchestrator: MatchOrchestrator
    advisor: ProjectAdvisor
    directory: ProviderDirectory

    @classmethod
    def build(cls, config: AppConfig, directory: Optional[ProviderDirectory] = None) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            directory: Provider pool; loaded from web.providers_file when omitted

        Returns:
            Fully wired AppContext instance
        """
        catalog = ServiceCatalog.load(config.catalog.path)
        llm_handle = LLMHandle(cls._build_ai_service(config.llm))

        if directory is None:
            directory = cls._build_directory(config)

        llm_calls = LLMCallPolicy.from_config(llm_handle, config.scoring)
        deterministic_scorer = DeterministicScorer(config.scoring.weights, catalog)
        scorer = AIScoringAdapter(
            llm=llm_calls,
            fallback=deterministic_scorer,
            catalog=catalog,
        )
        candidate_filter = CandidateFilter(catalog)
        orchestrator = MatchOrchestrator(
            scorer=scorer,
            candidate_filter=candidate_filter,
            config=config.matching,
            provider_lookup=directory.get,
        )
        advisor = ProjectAdvisor(
            llm=llm_calls,
            scorer=deterministic_scorer,
            catalog=catalog,
            provider_lookup=directory.get,
        )

        return cls(
            config=config,
            catalog=catalog,
            llm_handle=llm_handle,
            llm_calls=llm_calls,
            deterministic_scorer=deterministic_scorer,
            scorer=scorer,
            candidate_filter=candidate_filter,
            orchestrator=orchestrator,
            advisor=advisor,
            directory=directory,
        )

    def rotate_credentials(self, api_key: Optional[str], base_url: Optional[str] = None) -> None:
        """Swap in a new LLM client; the next AI call uses it."""
        llm_config = self.config.llm.model_copy(update={
            'api_key': api_key,
            'base_url': base_url or self.config.llm.base_url,
        })
        self.llm_handle.swap(self._build_ai_service(llm_config))

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'model': llm_config.model,
            'temperature': llm_config.temperature,
            'max_tokens': llm_config.max_tokens,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
        )

    @staticmethod
    def _build_directory(config: AppConfig) -> ProviderDirectory:
        providers_file = config.web.providers_file
        if not providers_file:
            logger.info("No providers_file configured; provider directory is empty")
            return ProviderDirectory()
        return ProviderDirectory.load(providers_file)
