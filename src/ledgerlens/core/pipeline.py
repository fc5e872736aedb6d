"""Document analysis pipeline."""

import logging
import time
from datetime import date

from ..classifiers import TaxCodeMatcher, WriteOffClassifier
from ..config import RuntimeConfig
from ..errors import (
    LedgerLensError,
    NotFoundError,
    UnsupportedInputError,
    ValidationFailureError,
    with_timeout,
)
from ..extractors import BaseExtractor, ExtractionResult, TabularExtractor, TextExtractor
from ..inference import AdviceGenerator, TextInferenceClient
from ..storage import BlobStorage, StorageService
from ..utils.file_handlers import FileHandler, detect_extraction_mode
from .models import (
    BalanceSheetItem,
    DocumentAnalysisResult,
    ExtractionMode,
    RawDocument,
    RiskLevel,
    WriteOffRecord,
    WriteOffStatus,
)

logger = logging.getLogger(__name__)

RECOMMENDATIONS = (
    "Review generated income statement for accuracy",
    "Verify revenue and expense classifications",
    "Consider any missing transactions",
)


class DocumentAnalysisPipeline:
    """
    Turn one uploaded document into ledger records.

    Orchestrates: Load -> Extract -> Classify -> Persist -> Mark processed
    """

    DOCUMENTS_TABLE = "processed_documents"
    WRITE_OFFS_TABLE = "write_offs"
    REVENUE_TABLE = "revenue_records"
    BALANCE_SHEET_TABLE = "balance_sheet_items"
    INSIGHTS_TABLE = "ai_insights"

    def __init__(
        self,
        settings: RuntimeConfig,
        storage: StorageService,
        blob_storage: BlobStorage,
        inference_client: TextInferenceClient | None = None,
        tabular_extractor: BaseExtractor | None = None,
        text_extractor: BaseExtractor | None = None,
    ):
        self.settings = settings
        self.storage = storage
        self.blob_storage = blob_storage
        self.tabular_extractor = tabular_extractor or TabularExtractor()
        self.text_extractor = text_extractor or TextExtractor()
        self.advice_generator = (
            AdviceGenerator(inference_client, settings.inference_timeout_seconds)
            if inference_client is not None
            else None
        )
        self.file_handler = FileHandler(settings.max_file_size_bytes)
        self.timeout = settings.storage_timeout_seconds

    async def run(self, owner_id: str, document_id: str) -> DocumentAnalysisResult:
        """
        Analyze a stored document and persist its records.

        The document row is marked completed only after every insert
        succeeded; on failure it is left as it was so it can be retried.

        Raises:
            ValidationFailureError: If owner or document id is missing
            NotFoundError: If the document does not exist for the owner
            UnsupportedInputError: If the document cannot be processed
            DependencyUnavailableError: If storage fails
        """
        if not owner_id or not document_id:
            raise ValidationFailureError("Both owner id and document id are required")

        start_time = time.time()
        document = await self._load_document(owner_id, document_id)

        if not document.storage_path:
            raise UnsupportedInputError(f"Document {document_id} has no stored content")

        logger.info(f"Downloading {document.original_filename} from {document.storage_path}")
        content = await with_timeout(
            self.blob_storage.download(document.storage_path),
            self.timeout,
            "document download",
        )
        self.file_handler.check_size(content)

        result = await self.analyze(document, content)
        await self.persist(owner_id, result)

        await with_timeout(
            self.storage.update(
                self.DOCUMENTS_TABLE,
                document.id,
                {
                    "extracted_data": result.model_dump(mode="json", by_alias=True),
                    "processing_status": "completed",
                    "document_type": "financial",
                },
            ),
            self.timeout,
            "document status update",
        )

        await self._record_advice(owner_id, document, result)

        logger.info(
            f"Document {document_id} analyzed in {int((time.time() - start_time) * 1000)}ms"
        )
        return result

    async def analyze(self, document: RawDocument, content: bytes) -> DocumentAnalysisResult:
        """
        Extract and classify the tuples of one document.

        Args:
            document: Document metadata (the filename decides the mode)
            content: Raw file bytes

        Returns:
            DocumentAnalysisResult; risk_level is "high" only when the
            tabular file could not be parsed
        """
        mode = detect_extraction_mode(document.original_filename)
        logger.info(f"Analyzing {document.original_filename} in {mode.value} mode")

        findings: list[str] = []
        write_offs: list[WriteOffRecord] = []
        risk_level = RiskLevel.LOW

        try:
            extraction = self._extractor_for(mode).extract(content, document.original_filename)
        except UnsupportedInputError as e:
            if mode != ExtractionMode.TABULAR:
                raise
            logger.warning(f"Tabular parsing failed for {document.original_filename}: {e}")
            findings.append(f"Error processing CSV file: {e.message}")
            extraction = ExtractionResult(mode=mode)
            risk_level = RiskLevel.HIGH

        classifier = WriteOffClassifier(TaxCodeMatcher(self.storage, self.timeout))
        for transaction in extraction.transactions:
            outcome = await classifier.classify(transaction, mode)
            if outcome.write_off is not None:
                write_offs.append(outcome.write_off)
            if outcome.finding is not None:
                findings.append(outcome.finding)

        logger.info(
            f"{document.original_filename}: {len(extraction.transactions)} transactions, "
            f"{len(write_offs)} write-offs"
        )

        return DocumentAnalysisResult(
            transactions=extraction.transactions,
            findings=findings,
            risk_level=risk_level,
            recommendations=list(RECOMMENDATIONS),
            write_offs=write_offs,
        )

    async def persist(self, owner_id: str, result: DocumentAnalysisResult) -> None:
        """
        Write the analysis into the ledger tables.

        Inserts happen in order (write-offs, revenue, balance sheet) and
        are not atomic: a failure leaves earlier groups in place and the
        first error is raised to the caller.
        """
        today = date.today().isoformat()

        if result.write_offs:
            rows = [
                {
                    "user_id": owner_id,
                    "amount": str(write_off.amount),
                    "description": write_off.description,
                    "tax_code_id": write_off.tax_code_id,
                    "date": today,
                    "status": WriteOffStatus.PENDING.value,
                }
                for write_off in result.write_offs
            ]
            await self._insert(self.WRITE_OFFS_TABLE, rows)

        revenue = result.revenue_transactions
        if revenue:
            rows = [
                {
                    "user_id": owner_id,
                    "amount": str(transaction.amount),
                    "description": transaction.description,
                    "category": "Document Import",
                    "date": today,
                }
                for transaction in revenue
            ]
            await self._insert(self.REVENUE_TABLE, rows)

        net_amount = result.net_amount
        if net_amount != 0:
            item = BalanceSheetItem(
                category="asset" if net_amount > 0 else "liability",
                amount=abs(net_amount),
            )
            await self._insert(
                self.BALANCE_SHEET_TABLE,
                [{"user_id": owner_id, **item.model_dump(mode="json")}],
            )

    async def _insert(self, table: str, rows: list[dict]) -> None:
        try:
            await with_timeout(self.storage.insert(table, rows), self.timeout, f"insert into {table}")
        except LedgerLensError:
            logger.error(f"Persisting {len(rows)} rows into {table} failed; earlier inserts are kept")
            raise
        logger.info(f"Inserted {len(rows)} rows into {table}")

    async def _load_document(self, owner_id: str, document_id: str) -> RawDocument:
        rows = await with_timeout(
            self.storage.select(
                self.DOCUMENTS_TABLE,
                {"id": document_id, "user_id": owner_id},
                limit=1,
            ),
            self.timeout,
            "document lookup",
        )
        if not rows:
            raise NotFoundError(f"Document {document_id} not found")
        return RawDocument.model_validate(rows[0])

    async def _record_advice(
        self,
        owner_id: str,
        document: RawDocument,
        result: DocumentAnalysisResult,
    ) -> None:
        """Store advice as an insight. Failures here never fail the run."""
        if self.advice_generator is None:
            return
        try:
            advice = await self.advice_generator.document_advice(document.original_filename, result)
            if not advice:
                return
            await with_timeout(
                self.storage.insert_one(
                    self.INSIGHTS_TABLE,
                    {
                        "user_id": owner_id,
                        "category": "document_analysis",
                        "insight": advice,
                        "confidence_score": 0.95,
                    },
                ),
                self.timeout,
                "insight insert",
            )
        except LedgerLensError as e:
            logger.warning(f"Advice for document {document.id} was not recorded: {e}")

    def _extractor_for(self, mode: ExtractionMode) -> BaseExtractor:
        if mode == ExtractionMode.TABULAR:
            return self.tabular_extractor
        return self.text_extractor
